# File: tests/conftest.py
# Contains pytest fixtures for the end-to-end CLI tests.

import os
from pathlib import Path
from typing import Dict

import pytest
import yaml


SAMPLE_SCHEMA = """\
generator client {
  provider = "prisma-client-js"
}

datasource db {
  provider = "mysql"
  url      = env("DATABASE_URL")
}

model order_items {
  id         Int      @id @default(autoincrement())
  user_id    Int
  created_at DateTime @default(now())

  @@index([user_id, created_at(sort: Desc)])
}

model users {
  id    Int    @id
  email String @unique
}
"""

EXPECTED_SCHEMA = """\
generator client {
  provider = "prisma-client-js"
}

datasource db {
  provider = "mysql"
  url      = env("DATABASE_URL")
}

model OrderItem {
  @@map("order_items")
  id         Int      @id @default(autoincrement())
  userId    Int @map("user_id")
  createdAt DateTime @default(now()) @map("created_at")

  @@index([userId, createdAt(sort: Desc)])
}

model User {
  @@map("users")
  id    Int    @id
  email String @unique
}
"""

SAMPLE_CATALOG = {
    "tables": {
        "order_items": ["id", "user_id", "created_at"],
        "users": ["id", "email"],
    }
}


@pytest.fixture(autouse=True)
def no_db_environment(monkeypatch):
    """Keep DB_* variables of the developer's shell out of the tests."""
    for key in list(os.environ):
        if key.startswith("DB_"):
            monkeypatch.delenv(key)


@pytest.fixture
def prisma_project(tmp_path: Path) -> Dict[str, Path]:
    """
    Writes a sample schema.prisma and a catalog file into a temporary project.
    Yields the paths of the schema, the catalog and the default output file.
    """
    prisma_dir = tmp_path / "prisma"
    prisma_dir.mkdir()
    schema_path = prisma_dir / "schema.prisma"
    schema_path.write_text(SAMPLE_SCHEMA, encoding="utf-8")

    catalog_path = tmp_path / "catalog.yaml"
    catalog_path.write_text(yaml.safe_dump(SAMPLE_CATALOG), encoding="utf-8")

    return {
        "schema": schema_path,
        "catalog": catalog_path,
        "output": prisma_dir / "enhanced-schema-singular.prisma",
    }


@pytest.fixture
def sample_schema() -> str:
    return SAMPLE_SCHEMA


@pytest.fixture
def expected_schema() -> str:
    return EXPECTED_SCHEMA
