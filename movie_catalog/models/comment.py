"""ORM model for user comments on movies."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import relationship

from movie_catalog.models.base import Base, new_id


class Comment(Base):
    """
    Plain-text comment by a user on a movie.

    movie_id is not a foreign key: movies may live in the JSON file store.
    """

    __tablename__ = "comments"

    id = Column(String(36), primary_key=True, default=new_id)
    text = Column(Text, nullable=False)
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    movie_id = Column(String(36), nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    user = relationship("User", back_populates="comments")
