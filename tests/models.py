"""Object metadata used across tests (a small CRM)."""

USERS = {
    'name': 'users',
    'label': 'Users',
    'fields': {
        'name': {'type': 'text'},
        'email': {'type': 'email'},
    },
}

ACCOUNTS = {
    'name': 'accounts',
    'label': 'Accounts',
    'enable_files': True,
    'fields': {
        'name': {'type': 'text', 'label': 'Account name'},
        'revenue': {'type': 'currency'},
        'active': {'type': 'boolean'},
        'owner': {'type': 'lookup', 'reference_to': 'users'},
        'address.city': {'type': 'text'},
        'notes': {'label': 'Notes without a type'},
        'settings': {'type': 'object'},
    },
}

CONTACTS = {
    'name': 'contacts',
    'fields': {
        'name': {'type': 'text'},
        'account': {'type': 'master_detail', 'reference_to': 'accounts'},
        'manager': {'type': 'lookup', 'reference_to': 'contacts'},
        'followers': {'type': 'lookup', 'reference_to': 'users', 'multiple': True},
        'region': {'type': 'lookup', 'reference_to': ['regions', 'countries']},
        'partner': {'type': 'lookup', 'reference_to': 'partners'},
    },
}

CMS_FILES = {
    'name': 'cms_files',
    'fields': {
        'name': {'type': 'text'},
        'parent': {'type': 'other'},
    },
}

TASKS = {
    'name': 'tasks',
    'fields': {
        'name': {'type': 'text'},
        'related_to': {'type': 'other'},
    },
}

ALL_OBJECTS = [USERS, ACCOUNTS, CONTACTS, CMS_FILES, TASKS]

ROWS = {
    'users': [
        {'_id': 'u1', 'name': 'Alice', 'email': 'alice@example.com'},
        {'_id': 'u2', 'name': 'Bob', 'email': 'bob@example.com'},
    ],
    'accounts': [
        {'_id': 'a1', 'name': 'Acme', 'revenue': 1200.5, 'active': True, 'owner': 'u1', 'settings': {'tier': 'gold'}},
        {'_id': 'a2', 'name': 'Globex', 'revenue': 0.0, 'active': False, 'owner': None},
    ],
    'contacts': [
        {'_id': 'c1', 'name': 'Carol', 'account': 'a1', 'followers': ['u1', 'u2'], 'manager': None},
        {'_id': 'c2', 'name': 'Dan', 'account': 'a1', 'followers': [], 'manager': 'c1'},
        {'_id': 'c3', 'name': 'Eve', 'account': 'a2', 'followers': 'u2'},
    ],
    'cms_files': [
        {'_id': 'f1', 'name': 'contract.pdf', 'parent': {'o': 'accounts', 'ids': ['a1']}},
        {'_id': 'f2', 'name': 'logo.png', 'parent': {'o': 'accounts', 'ids': ['a2']}},
        {'_id': 'f3', 'name': 'orphan.txt', 'parent': {'o': 'projects', 'ids': ['p1']}},
    ],
    'tasks': [],
}
