"""Test database provisioning with Testcontainers.

Starts a real PostgreSQL container, applies init scripts and publishes the
connection parameters, either from explicit arguments or from a container
database URL:

    tc:postgresql:15.2-alpine:///db?TC_INITSCRIPT=sql/init-db.sql

Usage:
    from src.provisioning.postgres import PostgresProvisioner

    with PostgresProvisioner.from_url(url) as provisioner:
        engine = provisioner.create_engine()
        async with engine.begin() as conn:
            await provisioner.apply_init_scripts(conn)
"""
