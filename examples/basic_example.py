"""
Basic example of generating a GraphQL schema with objectql.

This example demonstrates:
- Declaring objects and fields as plain metadata
- Plugging in a record-access implementation per object
- Fields registered before their object is declared
- Querying lookups and synthesized ``related__*`` reverse fields
"""

import asyncio
import json

from objectql import MetadataRegistry, build_schema


class DictRecords:
    """Minimal synchronous record access over a list of dicts."""

    def __init__(self, rows):
        self.rows = rows

    def find(self, query, access_context=None):
        filters = query.get('filters')
        if isinstance(filters, list):
            return [r for r in self.rows if all(r.get(f) == v for f, _op, v in filters)]
        return list(self.rows)

    def find_one(self, record_id, options, access_context=None):
        return next((r for r in self.rows if r['_id'] == record_id), None)

    def insert(self, data, access_context=None):
        self.rows.append(data)
        return data

    def update(self, record_id, data, access_context=None):
        row = self.find_one(record_id, {})
        if row is not None:
            row.update(data)
        return row

    def delete(self, record_id, access_context=None):
        row = self.find_one(record_id, {})
        if row is not None:
            self.rows.remove(row)
        return row


DATA = {
    'authors': [{'_id': 'a1', 'name': 'Ursula'}],
    'books': [
        {'_id': 'b1', 'title': 'The Dispossessed', 'author': 'a1', 'pages': 387},
        {'_id': 'b2', 'title': 'The Lathe of Heaven', 'author': 'a1', 'pages': 184},
    ],
}


def make_registry():
    registry = MetadataRegistry()
    registry.datasource('default', driver=lambda obj: DictRecords(DATA[obj.name]))

    # Field files may be loaded before the object they extend
    registry.add_object_field_config('books', {'name': 'pages', 'type': 'number'})

    registry.add_object({'name': 'authors', 'fields': {'name': {'type': 'text'}}})
    registry.add_object({
        'name': 'books',
        'label': 'Books',
        'fields': {
            'title': {'type': 'text'},
            'author': {'type': 'master_detail', 'reference_to': 'authors'},
        },
    })
    return registry


QUERY = """
query {
  authors {
    name
    related__books { title pages }
  }
  books(top: 1) { title author { name } }
}
"""


async def main():
    schema = build_schema(make_registry())
    print(schema.as_str())
    result = await schema.execute(QUERY, context_value={'user': {'_id': 'admin'}})
    if result.errors:
        for err in result.errors:
            print("error:", err.message)
    print(json.dumps(result.data, indent=2))


if __name__ == "__main__":
    asyncio.run(main())
