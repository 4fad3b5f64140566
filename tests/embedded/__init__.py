"""Embedded-dialect tests: in-memory SQLite, the lightweight store the
PostgreSQL container replaces. These run without Docker and show which
statements the embedded dialect accepts or rejects.
"""
