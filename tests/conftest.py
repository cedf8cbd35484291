"""
Pytest configuration and fixtures for Warehouse Stock Backend tests.
"""
from unittest.mock import Mock

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient
from apps.api.authentication import JWTService
from apps.core import store_client as store_client_module
from apps.core.store_client import ProductStoreClient
from apps.users.entities import Warehouseman
from apps.users.services.session_store import SessionStore

from tests.helpers import LYON, PARIS


@pytest.fixture(autouse=True)
def clear_cache():
    """Sessions and the deletion ledger live in the cache."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def store_client(monkeypatch):
    """Store client double installed as the process-wide client."""
    client = Mock(spec=ProductStoreClient)
    monkeypatch.setattr(store_client_module, '_client', client)
    return client


@pytest.fixture
def warehouseman_data():
    return {
        'id': 1,
        'name': 'John Doe',
        'dob': '1990-04-12',
        'city': 'Paris',
        'secretKey': 'WH-1234',
        'warehouseId': 3,
    }


@pytest.fixture
def second_warehouseman_data():
    return {
        'id': 2,
        'name': 'Jane Roe',
        'dob': '1988-11-02',
        'city': 'Lyon',
        'secretKey': 'WH-5678',
        'warehouseId': 4,
    }


@pytest.fixture
def warehouseman(warehouseman_data):
    return Warehouseman.from_dict(warehouseman_data)


@pytest.fixture
def product_data():
    """Product with one stock entry of 25 units."""
    return {
        'id': 1,
        'name': 'MacBook Pro',
        'type': 'Laptop',
        'barcode': '456789123',
        'price': 1299.99,
        'supplier': 'Apple Inc',
        'image': 'https://example.com/macbook.jpg',
        'sold': 3,
        'stocks': [
            {'id': 1, 'name': 'Main Warehouse', 'quantity': 25, 'localisation': dict(PARIS)},
        ],
        'editedBy': {'warehouseManId': 1, 'at': '2024-02-15T10:00:00.000Z'},
    }


@pytest.fixture
def catalog():
    """Small product collection spread over two cities."""
    return [
        {
            'id': 1, 'name': 'iPhone 13', 'type': 'Smartphone', 'barcode': '123456789',
            'price': 999.99, 'supplier': 'Apple Inc', 'image': '', 'sold': 12,
            'stocks': [
                {'id': 1, 'name': 'Main Warehouse', 'quantity': 10, 'localisation': dict(PARIS)},
                {'id': 2, 'name': 'South Depot', 'quantity': 5, 'localisation': dict(LYON)},
            ],
            'editedBy': {'warehouseManId': 1, 'at': '2024-02-15T10:00:00.000Z'},
        },
        {
            'id': 2, 'name': 'galaxy S21', 'type': 'Smartphone', 'barcode': '987654321',
            'price': 899.99, 'supplier': 'Samsung Electronics', 'image': '', 'sold': 0,
            'stocks': [
                {'id': 1, 'name': 'Main Warehouse', 'quantity': 0, 'localisation': dict(PARIS)},
            ],
            'editedBy': {'warehouseManId': 2, 'at': '2024-02-16T10:00:00.000Z'},
        },
        {
            'id': 3, 'name': 'ThinkPad X1', 'type': 'Laptop', 'barcode': '555000111',
            'price': 1500, 'supplier': 'Lenovo', 'image': '', 'sold': 4,
            'stocks': [
                {'id': 1, 'name': 'South Depot', 'quantity': 40, 'localisation': dict(LYON)},
            ],
            'editedBy': {'warehouseManId': 1, 'at': '2024-02-17T10:00:00.000Z'},
        },
    ]


@pytest.fixture
def api_client():
    """API client for testing."""
    return APIClient()


@pytest.fixture
def session(warehouseman):
    """Open session for the default warehouseman; returns its token payload."""
    session_id = JWTService.new_session_id()
    SessionStore.save(session_id, warehouseman)
    return {'sid': session_id, 'tokens': JWTService.generate_token(warehouseman, session_id)}


@pytest.fixture
def jwt_client(api_client, session):
    """API client with a JWT token for a logged-in warehouseman."""
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {session['tokens']['access_token']}")
    return api_client


@pytest.fixture
def settings_override(settings):
    """Override settings for testing."""
    settings.STOCK_SYSTEM = {**settings.STOCK_SYSTEM, 'VERIFY_BEFORE_WRITE': True}
    return settings
