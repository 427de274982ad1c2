"""Example usage of the freedb library."""

from pathlib import Path

from freedb import Registry

db_file = Path("./example.db")

# Open (or create) the database; it is saved again when the block exits
with Registry(db_file) as db:
    db.create_table("people", "name: string, age: integer, active: boolean, joined: date")
    people = db.table("people")

    rows = [
        {"name": "Alice", "age": 30, "active": "true", "joined": "2023-04-01"},
        {"name": "Bob", "age": "25", "active": "false", "joined": "2023-06-15"},
        {"name": "Charlie", "age": 35, "active": True, "joined": "2024-01-09"},
        {"name": "Diana", "age": 28, "active": "TRUE", "joined": "2024-02-20"},
        {"name": "Eve", "age": 30, "active": "False", "joined": "2024-03-03"},
    ]

    print("Inserting people...")
    for row in rows:
        stored = people.insert(row)
        print(f"  Stored: {stored}")

    print("\nAge 30:")
    for row in people.where({"age": 30}):
        print(f"  {row['name']}")

    print("\nOldest three:")
    for row in people.order_by("age", "desc")[:3]:
        print(f"  {row['name']}, age {row['age']}")

    print("\nFirst two inserted:")
    for row in people.limit(2):
        print(f"  {row['name']}")

print(f"\nSaved to {db_file} ({db_file.stat().st_size} bytes)")
print("Inspect it with:")
print(f"  freedb -d {db_file} tables")
print(f"  freedb -d {db_file} rows people --where age=30")
