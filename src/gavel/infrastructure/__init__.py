"""Infrastructure layer: database, repositories, and security capabilities.

This layer depends on stdlib, the domain models, and third-party libs
(SQLAlchemy, bcrypt, python-jose). It must never import from services,
api, commands, or output. Repositories hand domain models to the service
layer and raise :class:`StorageError` for anything the store rejects.
"""
