"""
Example script rendering column definitions and scanning rows into records.
"""

from dataclasses import dataclass, field

import colmeta
from colmeta import DDLRenderer, SQLGlotDialect


@dataclass
class Address:
    city: str = ""


@dataclass
class User:
    ID: int = 0
    addr: Address | None = None
    Status: str = ""
    CreatedAt: str = ""
    Version: int = 0
    tags: list[str] = field(default_factory=list)


def main():
    columns = colmeta.from_yaml("examples/specs/users.yaml")

    for dialect_name in ("mysql", "postgres", "sqlite"):
        renderer = DDLRenderer(SQLGlotDialect(dialect_name))
        body = ",\n  ".join(
            fragment.rstrip() for fragment in renderer.render_columns(columns)
        )
        print(f"--- {dialect_name} ---")
        print(f"CREATE TABLE users (\n  {body}\n);\n")

    row = {
        "id": 1,
        "city": "Lisbon",
        "status": "active",
        "created_at": "2024-01-01",
        "version": 3,
    }
    user = User()
    for column in columns:
        column.value_of(user).set(row[column.name])

    print("--- Scanned record ---")
    print(user)


if __name__ == "__main__":
    main()
