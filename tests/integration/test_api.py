"""
Integration tests for Warehouse Stock Backend API.
"""
from django.urls import reverse
from rest_framework import status
from apps.core.store_client import StoreError, StoreNotFound, StoreUnavailable
from apps.inventory.services.deletion_ledger import DeletionLedger

from tests.helpers import PARIS, echo_write, store_response


class TestAuthenticationAPI:
    """Test authentication API endpoints."""

    def test_login_success(self, api_client, store_client, warehouseman_data):
        """Test successful login with a secret code."""
        store_client.get.return_value = store_response([warehouseman_data])
        url = reverse('api:login')

        response = api_client.post(url, {'secret_key': 'WH-1234'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['tokens']['token_type'] == 'Bearer'
        assert response.data['warehouseman']['name'] == 'John Doe'
        assert 'secret_key' not in response.data['warehouseman']

    def test_login_token_opens_session(self, api_client, store_client, warehouseman_data):
        """The returned token authenticates later requests."""
        store_client.get.return_value = store_response([warehouseman_data])
        tokens = api_client.post(reverse('api:login'), {'secret_key': 'WH-1234'}, format='json').data['tokens']

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access_token']}")
        response = api_client.get(reverse('api:me'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == 1

    def test_login_invalid_code(self, api_client, store_client, warehouseman_data):
        """Test login with an unknown secret code."""
        store_client.get.return_value = store_response([warehouseman_data])

        response = api_client.post(reverse('api:login'), {'secret_key': 'nope'}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error'] == 'Invalid secret code. Please try again.'

    def test_login_empty_code(self, api_client, store_client):
        """An empty code is refused before querying the store."""
        response = api_client.post(reverse('api:login'), {'secret_key': '  '}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['secret_key'][0] == 'Please enter your secret code'
        store_client.get.assert_not_called()

    def test_login_store_down(self, api_client, store_client):
        store_client.get.side_effect = StoreUnavailable("down")

        response = api_client.post(reverse('api:login'), {'secret_key': 'WH-1234'}, format='json')

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.data['error'] == 'Something went wrong. Please try again.'

    def test_me_endpoint_unauthenticated(self, api_client):
        """Test /me endpoint without authentication."""
        response = api_client.get(reverse('api:me'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_invalid_token(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')

        response = api_client.get(reverse('api:me'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_logout_invalidates_token(self, jwt_client):
        """After logout the same token is refused."""
        response = jwt_client.post(reverse('api:logout'))
        assert response.status_code == status.HTTP_200_OK

        response = jwt_client.get(reverse('api:me'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestProductAPI:
    """Test product API endpoints."""

    def test_list_requires_login(self, api_client, store_client):
        response = api_client.get(reverse('api:product_list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        store_client.get.assert_not_called()

    def test_list_products(self, jwt_client, store_client, catalog):
        store_client.get.return_value = store_response(catalog)

        response = jwt_client.get(reverse('api:product_list'), {'sort': 'quantity'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 3
        assert [p['name'] for p in response.data['results']] == ['ThinkPad X1', 'iPhone 13', 'galaxy S21']
        assert response.data['results'][1]['total_quantity'] == 15
        assert response.json()['results'][1]['price'] == 999.99

    def test_list_search(self, jwt_client, store_client, catalog):
        store_client.get.return_value = store_response(catalog)

        response = jwt_client.get(reverse('api:product_list'), {'search': 'laptop'})

        assert response.data['count'] == 1
        assert response.data['results'][0]['name'] == 'ThinkPad X1'

    def test_list_unknown_sort(self, jwt_client, store_client):
        response = jwt_client.get(reverse('api:product_list'), {'sort': 'colour'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_product_detail(self, jwt_client, store_client, catalog):
        store_client.get.return_value = store_response(catalog[0])
        url = reverse('api:product_detail', kwargs={'product_id': 1})

        response = jwt_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['product']['barcode'] == '123456789'
        assert response.data['stock_summary']['total_quantity'] == 15
        assert len(response.data['stock_summary']['locations']) == 2

    def test_product_detail_not_found(self, jwt_client, store_client):
        store_client.get.side_effect = StoreNotFound("missing", status_code=404)
        url = reverse('api:product_detail', kwargs={'product_id': 99})

        response = jwt_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] == 'Product not found'

    def test_product_id_with_query_characters(self, jwt_client, store_client, catalog):
        """An id holding '?' stays one path segment and never reads as a list query."""
        store_client.get.return_value = store_response(catalog)

        response = jwt_client.get('/api/products/%3Fbarcode=1/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        store_client.get.assert_called_once_with('/products/%3Fbarcode%3D1')

    def test_create_product(self, jwt_client, store_client):
        store_client.get.return_value = store_response([])
        store_client.post.side_effect = lambda path, payload: store_response({**payload, 'id': 7}, 201)
        data = {
            'name': 'Dell XPS 13',
            'type': 'Laptop',
            'barcode': '111222333',
            'price': '1199.50',
            'supplier': 'Dell',
            'stock': {'name': 'Main Warehouse', 'quantity': 12, 'localisation': PARIS},
        }

        response = jwt_client.post(reverse('api:product_list'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['message'] == 'Product created successfully'
        assert response.data['product']['id'] == 7
        assert response.data['product']['sold'] == 0
        payload = store_client.post.call_args[0][1]
        assert payload['editedBy']['warehouseManId'] == 1

    def test_create_duplicate_barcode(self, jwt_client, store_client, catalog):
        store_client.get.return_value = store_response([catalog[0]])
        data = {
            'name': 'iPhone 13 bis',
            'type': 'Smartphone',
            'barcode': '123456789',
            'price': 10,
            'supplier': 'Apple Inc',
            'stock': {'name': 'Main Warehouse', 'quantity': 1},
        }

        response = jwt_client.post(reverse('api:product_list'), data, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['error'] == 'Product with this barcode already exists'
        store_client.post.assert_not_called()

    def test_create_missing_fields(self, jwt_client, store_client):
        response = jwt_client.post(reverse('api:product_list'), {'name': 'Only a name'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        store_client.post.assert_not_called()

    def test_update_product(self, jwt_client, store_client, product_data):
        store_client.get.return_value = store_response(product_data)
        store_client.put.side_effect = echo_write
        url = reverse('api:product_detail', kwargs={'product_id': 1})

        response = jwt_client.patch(url, {'supplier': 'Apple Europe'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['product']['supplier'] == 'Apple Europe'
        assert response.data['message'] == 'Product updated successfully'

    def test_delete_product(self, jwt_client, store_client, product_data):
        store_client.get.return_value = store_response(product_data)
        store_client.delete.return_value = store_response(None)
        url = reverse('api:product_detail', kwargs={'product_id': 1})

        response = jwt_client.delete(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Product deleted successfully'

        ledger = jwt_client.get(reverse('api:deletion_ledger'))
        assert ledger.data['results'][0]['product_name'] == 'MacBook Pro'
        assert ledger.data['results'][0]['count'] == 1

    def test_store_failure_is_generic(self, jwt_client, store_client):
        store_client.get.side_effect = StoreError("Store returned 500", status_code=500)

        response = jwt_client.get(reverse('api:product_list'))

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data == {'error': 'Something went wrong. Please try again.'}

    def test_store_unavailable(self, jwt_client, store_client):
        store_client.get.side_effect = StoreUnavailable("down")

        response = jwt_client.get(reverse('api:product_list'))

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE


class TestStockAPI:
    """Test stock movement endpoints."""

    def url(self, stock_id=1):
        return reverse('api:update_stock', kwargs={'product_id': 1, 'stock_id': stock_id})

    def test_add_stock(self, jwt_client, store_client, product_data):
        store_client.get.return_value = store_response(product_data)
        store_client.put.side_effect = echo_write

        response = jwt_client.post(self.url(), {'quantity': 5, 'operation': 'add'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Stock added successfully'
        assert response.data['product']['stocks'][0]['quantity'] == 30
        assert response.data['product']['edited_by']['warehouseman_id'] == 1

    def test_remove_too_much(self, jwt_client, store_client, product_data):
        store_client.get.return_value = store_response(product_data)

        response = jwt_client.post(self.url(), {'quantity': 26, 'operation': 'remove'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Insufficient stock quantity'
        store_client.put.assert_not_called()

    def test_unknown_stock(self, jwt_client, store_client, product_data):
        store_client.get.return_value = store_response(product_data)

        response = jwt_client.post(self.url(stock_id=8), {'quantity': 1, 'operation': 'add'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_zero_quantity(self, jwt_client, store_client):
        response = jwt_client.post(self.url(), {'quantity': 0, 'operation': 'add'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        store_client.get.assert_not_called()

    def test_conflict_with_verification(self, jwt_client, store_client, product_data, settings_override):
        changed = {**product_data, 'editedBy': {'warehouseManId': 2, 'at': '2024-02-15T11:00:00.000Z'}}
        store_client.get.side_effect = [store_response(product_data), store_response(changed)]

        response = jwt_client.post(self.url(), {'quantity': 1, 'operation': 'add'}, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        store_client.put.assert_not_called()


class TestScanAndExportAPI:
    """Test barcode scan, label and PDF endpoints."""

    def test_scan(self, jwt_client, store_client, product_data):
        store_client.get.return_value = store_response([product_data])

        response = jwt_client.post(reverse('api:scan'), {'barcode': '456789123'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['product_id'] == 1

    def test_scan_unknown(self, jwt_client, store_client):
        store_client.get.return_value = store_response([])

        response = jwt_client.post(reverse('api:scan'), {'barcode': '000'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] == 'No product found for this barcode'

    def test_export_product_pdf(self, jwt_client, store_client, product_data):
        store_client.get.return_value = store_response(product_data)
        url = reverse('api:export_product_pdf', kwargs={'product_id': 1})

        response = jwt_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'] == 'application/pdf'
        assert 'product_1.pdf' in response['Content-Disposition']
        assert response.content.startswith(b'%PDF')

    def test_product_label(self, jwt_client, store_client, product_data):
        store_client.get.return_value = store_response(product_data)
        url = reverse('api:product_label', kwargs={'product_id': 1})

        response = jwt_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'] == 'image/png'


class TestStatisticsAPI:
    """Test statistics endpoints."""

    def test_statistics(self, jwt_client, store_client, catalog):
        store_client.get.return_value = store_response(catalog)

        response = jwt_client.get(reverse('api:statistics'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_products'] == 3
        assert response.data['total_cities'] == 2
        assert response.data['out_of_stock_products'] == 1
        assert response.data['most_sold_products'] == ['iPhone 13 (12)', 'ThinkPad X1 (4)']

    def test_statistics_pdf(self, jwt_client, store_client, catalog):
        store_client.get.return_value = store_response(catalog)

        response = jwt_client.get(reverse('api:export_statistics_pdf'))

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'] == 'application/pdf'


class TestHealthAPI:

    def test_health_ok(self, api_client, store_client):
        store_client.get.return_value = store_response([])

        response = api_client.get(reverse('core:health'))

        assert response.status_code == status.HTTP_200_OK

    def test_health_store_down(self, api_client, store_client):
        store_client.get.side_effect = StoreUnavailable("down")

        response = api_client.get(reverse('core:health'))

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE


def test_ledger_starts_empty(jwt_client):
    assert DeletionLedger.all() == []
    assert jwt_client.get(reverse('api:deletion_ledger')).data == {'results': []}
