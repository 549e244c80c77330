"""ORM model for catalog movies (used when MOVIE_STORE=database)."""

from sqlalchemy import JSON, Column, DateTime, Float, Integer, String, Text, func

from movie_catalog.models.base import DEFAULT_IMAGE, Base, new_id


class Movie(Base):
    """A catalog entry. genre is a JSON list of strings."""

    __tablename__ = "movies"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False, index=True)
    year = Column(Integer, nullable=False)
    description = Column(Text, nullable=True)
    genre = Column(JSON, nullable=False, default=list)
    trailer = Column(String(1024), nullable=False)
    image = Column(String(255), nullable=False, default=DEFAULT_IMAGE)
    rating_imdb = Column(Float, nullable=True)
    rating_rotten_tomatoes = Column(Float, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
