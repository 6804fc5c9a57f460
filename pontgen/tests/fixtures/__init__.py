"""Test fixtures for pontgen tests.

This module provides sample API descriptions for testing naming, grouping
and generation.
"""

# Swagger 2 description as produced by springfox, with controller tags and
# "Using<VERB>" operation ids.
SWAGGER_SPEC = {
    'swagger': '2.0',
    'info': {'title': 'Shop API', 'version': '1.0.0'},
    'basePath': '/',
    'tags': [
        {'name': 'pet-controller', 'description': 'Pet Controller'},
        {'name': 'store-order-controller', 'description': 'Store Order Controller'},
    ],
    'paths': {
        '/api/pet/list': {
            'get': {
                'tags': ['pet-controller'],
                'summary': 'List pets',
                'operationId': 'listPetsUsingGET',
                'parameters': [
                    {'name': 'page-size', 'in': 'query', 'type': 'integer'},
                    {'name': 'status', 'in': 'query', 'type': 'string'},
                ],
            }
        },
        '/api/pet/{petId}': {
            'parameters': [
                {'name': 'petId', 'in': 'path', 'required': True, 'type': 'integer'}
            ],
            'get': {
                'tags': ['pet-controller'],
                'summary': 'Find pet by ID',
                'operationId': 'getPetUsingGET',
            },
            'delete': {
                'tags': ['pet-controller'],
                'summary': 'Deletes a pet',
                'operationId': 'deleteUsingDELETE',
            },
        },
        '/api/store/order': {
            'post': {
                'tags': ['store-order-controller'],
                'summary': 'Place an order',
                'operationId': 'placeOrderUsingPOST',
                'parameters': [
                    {'name': 'order', 'in': 'body', 'schema': {'type': 'object'}}
                ],
            }
        },
    },
}

# OpenAPI 3 description without tags, grouped by path.
UNTAGGED_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Untagged API', 'version': '1.0.0'},
    'paths': {
        '/v1/users': {
            'get': {'summary': 'List users'},
            'post': {'summary': 'Create user'},
        },
        '/v1/users/{id}': {
            'get': {
                'summary': 'Get user',
                'parameters': [{'name': 'id', 'in': 'path', 'required': True}],
            },
        },
        '/v1/orders/{order-id}/items.json': {
            'get': {'description': 'Order items'},
        },
    },
}

# Two operations resolving to the same identifier in one module.
COLLIDING_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Colliding API', 'version': '1.0.0'},
    'paths': {
        '/users/list': {'get': {'operationId': 'listUsingGET', 'tags': ['user']}},
        '/users/all': {'get': {'operationId': 'listUsingGET_1', 'tags': ['user']}},
    },
}
