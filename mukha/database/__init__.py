"""
The `database` package is responsible for all interactions with the application's database.
It provides configuration, entity definitions, CRUD operations, and the service layer
used by the API routers.

Contents:
    - config:
        Settings and the SQLAlchemy engine / declarative base.

    - entities:
        SQLAlchemy entity models for users, messages and knowledge entries.

    - daos:
        Data Access Objects (DAOs) providing CRUD operations for the entities.

    - core:
        Service functions that connect the routers with the database, and the
        account policy.

    - helpers:
        Transaction management (`@transactional`).
"""
