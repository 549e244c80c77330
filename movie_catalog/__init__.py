"""Movie catalog REST API: users, movies and comments."""
