"""
Product service for Warehouse Stock Backend.
Handles product listing, lookup, creation, edition and deletion against
the remote store.
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from django.conf import settings
from apps.core.results import ServiceResult
from apps.core.store_client import ProductStoreClient, StoreNotFound, get_store_client
from apps.inventory.entities import EditHistory, Location, Product, Stock, to_decimal
from apps.inventory.services.deletion_ledger import DeletionLedger

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Please fill all required fields"
SORT_KEYS = ('name', 'price', 'quantity')


def resolve_editor(acting_id: Optional[int]) -> int:
    """Identity stamped on edits; the configured default when none is given."""
    if acting_id is None:
        return settings.STOCK_SYSTEM['DEFAULT_WAREHOUSEMAN_ID']
    return acting_id


def product_path(product_id: Any) -> str:
    """Store path of one product; the id comes from a URL and is encoded."""
    return f"/products/{quote(str(product_id), safe='')}"


def format_price(price: Decimal) -> str:
    """Price as plain text, without trailing zeros ("10", "899.99")."""
    return format(price.normalize(), 'f')


class ProductService:
    """Service class for product operations."""

    @staticmethod
    def get_all_products(client: Optional[ProductStoreClient] = None) -> List[Product]:
        client = client or get_store_client()
        response = client.get('/products')
        return [Product.from_dict(item) for item in response.data or []]

    @staticmethod
    def list_products(
        search: str = "",
        sort_by: str = "name",
        client: Optional[ProductStoreClient] = None
    ) -> List[Product]:
        """
        List products matching a search text, sorted.

        Args:
            search: Case-insensitive text matched against name, type,
                supplier and price
            sort_by: 'name' (A-Z), 'price' (ascending) or 'quantity'
                (total stock, descending); other values keep store order
            client: Store client, defaults to the configured one

        Returns:
            Filtered and sorted products
        """
        products = ProductService.get_all_products(client)

        needle = (search or "").strip().lower()
        if needle:
            products = [p for p in products if ProductService.matches(p, needle)]

        if sort_by == 'name':
            products.sort(key=lambda p: p.name.casefold())
        elif sort_by == 'price':
            products.sort(key=lambda p: p.price)
        elif sort_by == 'quantity':
            products.sort(key=lambda p: p.total_quantity, reverse=True)

        return products

    @staticmethod
    def matches(product: Product, needle: str) -> bool:
        return (
            needle in product.name.lower()
            or needle in product.type.lower()
            or needle in product.supplier.lower()
            or needle in format_price(product.price)
        )

    @staticmethod
    def get_product(product_id: Any, client: Optional[ProductStoreClient] = None) -> ServiceResult:
        client = client or get_store_client()
        try:
            response = client.get(product_path(product_id))
        except StoreNotFound:
            return ServiceResult.not_found("Product not found")

        # A path the store reads as a collection query answers with a list
        if not isinstance(response.data, dict):
            return ServiceResult.not_found("Product not found")

        return ServiceResult.success(Product.from_dict(response.data), status=response.status)

    @staticmethod
    def find_by_barcode(barcode: str, client: Optional[ProductStoreClient] = None) -> List[Product]:
        client = client or get_store_client()
        response = client.get('/products', params={'barcode': barcode})
        return [Product.from_dict(item) for item in response.data or []]

    @staticmethod
    def get_product_by_barcode(barcode: str, client: Optional[ProductStoreClient] = None) -> ServiceResult:
        matches = ProductService.find_by_barcode(barcode, client)
        if not matches:
            return ServiceResult.not_found("No product found for this barcode")
        return ServiceResult.success(matches[0])

    @staticmethod
    def create_product(
        data: Dict[str, Any],
        initial_stock: Dict[str, Any],
        acting_id: Optional[int] = None,
        client: Optional[ProductStoreClient] = None
    ) -> ServiceResult:
        """
        Create a product with a single initial stock entry.

        Barcode uniqueness is checked with a lookup before writing; the store
        does not enforce it, so two concurrent creations can still collide.

        Args:
            data: name, type, barcode, price, supplier and image
            initial_stock: name, quantity and localisation of the first stock
            acting_id: Warehouseman performing the creation
            client: Store client, defaults to the configured one

        Returns:
            201 result with the created product, 409 on duplicate barcode,
            400 on missing fields
        """
        client = client or get_store_client()

        price = ProductService._parse_price(data.get('price'))
        quantity = initial_stock.get('quantity', 0)
        if (
            not all(str(data.get(f) or '').strip() for f in ('name', 'type', 'barcode', 'supplier'))
            or price is None
            or not ProductService._is_valid_quantity(quantity)
        ):
            return ServiceResult.invalid(REQUIRED_FIELDS_MESSAGE)

        barcode = str(data['barcode']).strip()
        if ProductService.find_by_barcode(barcode, client):
            logger.info(f"Rejected duplicate barcode {barcode}", extra={'event_type': 'product_conflict'})
            return ServiceResult.conflict("Product with this barcode already exists")

        product = Product(
            id=None,
            name=str(data['name']).strip(),
            type=str(data['type']).strip(),
            barcode=barcode,
            price=price,
            supplier=str(data['supplier']).strip(),
            image=data.get('image') or "",
            sold=0,
            stocks=[Stock(
                id=initial_stock.get('id') or 1,
                name=initial_stock.get('name') or "",
                quantity=int(quantity),
                localisation=Location.from_dict(initial_stock.get('localisation')),
            )],
            edited_by=EditHistory.stamp(resolve_editor(acting_id)),
        )

        response = client.post('/products', product.to_dict())
        created = Product.from_dict(response.data)

        logger.info(f"Product created: {created.name}", extra={
            'product_id': created.id,
            'barcode': created.barcode,
            'warehouseman_id': product.edited_by.warehouseman_id,
            'event_type': 'product_created'
        })
        return ServiceResult.success(created, "Product created successfully", status=201)

    @staticmethod
    def update_product(
        product_id: Any,
        data: Dict[str, Any],
        acting_id: Optional[int] = None,
        client: Optional[ProductStoreClient] = None
    ) -> ServiceResult:
        """
        Edit a product and write the whole record back.

        Fields absent from ``data`` keep their current value. Stock entries
        in ``data['stocks']`` are matched by id; only their quantity and name
        are edited.
        """
        client = client or get_store_client()

        current = ProductService.get_product(product_id, client)
        if not current.ok:
            return current
        product: Product = current.data

        for attr in ('name', 'type', 'supplier', 'image'):
            if attr in data:
                setattr(product, attr, str(data[attr] or "").strip())

        if 'price' in data:
            price = ProductService._parse_price(data['price'])
            if price is None:
                return ServiceResult.invalid(REQUIRED_FIELDS_MESSAGE)
            product.price = price

        if not (product.name and product.type and product.supplier):
            return ServiceResult.invalid(REQUIRED_FIELDS_MESSAGE)

        for edit in data.get('stocks') or []:
            stock = product.find_stock(edit.get('id'))
            if stock is None:
                return ServiceResult.not_found("Stock not found for this product")
            if 'quantity' in edit:
                if not ProductService._is_valid_quantity(edit['quantity']):
                    return ServiceResult.invalid("Stock quantity cannot be negative")
                stock.quantity = int(edit['quantity'])
            if edit.get('name'):
                stock.name = edit['name']

        new_barcode = str(data.get('barcode') or '').strip()
        if new_barcode and new_barcode != product.barcode:
            clashes = [p for p in ProductService.find_by_barcode(new_barcode, client) if str(p.id) != str(product.id)]
            if clashes:
                return ServiceResult.conflict("Product with this barcode already exists")
            product.barcode = new_barcode

        product.edited_by = EditHistory.stamp(resolve_editor(acting_id))
        response = client.put(product_path(product.id), product.to_dict())

        logger.info(f"Product updated: {product.name}", extra={
            'product_id': product.id,
            'warehouseman_id': product.edited_by.warehouseman_id,
            'event_type': 'product_updated'
        })
        return ServiceResult.success(Product.from_dict(response.data), "Product updated successfully")

    @staticmethod
    def delete_product(product_id: Any, client: Optional[ProductStoreClient] = None) -> ServiceResult:
        """
        Hard-delete a product and count the deletion under its name.
        """
        client = client or get_store_client()

        current = ProductService.get_product(product_id, client)
        if not current.ok:
            return current
        product: Product = current.data

        try:
            client.delete(product_path(product.id))
        except StoreNotFound:
            return ServiceResult.not_found("Product not found")

        entry = DeletionLedger.record(product.name)

        logger.info(f"Product deleted: {product.name}", extra={
            'product_id': product.id,
            'deletion_count': entry.count,
            'event_type': 'product_deleted'
        })
        return ServiceResult.success(product, "Product deleted successfully")

    @staticmethod
    def stock_summary(product: Product) -> Dict[str, Any]:
        """Total quantity and per-location breakdown for a product."""
        return {
            'total_quantity': product.total_quantity,
            'locations': [
                {
                    'stock_id': stock.id,
                    'name': stock.name,
                    'city': stock.localisation.city,
                    'quantity': stock.quantity,
                }
                for stock in product.stocks
            ],
        }

    @staticmethod
    def _parse_price(value: Any) -> Optional[Decimal]:
        if value is None or value == '' or isinstance(value, bool):
            return None
        try:
            price = to_decimal(value)
        except (InvalidOperation, ValueError):
            return None
        if not price.is_finite() or price < 0:
            return None
        return price

    @staticmethod
    def _is_valid_quantity(value: Any) -> bool:
        if isinstance(value, bool):
            return False
        try:
            return int(value) >= 0 and int(value) == float(value)
        except (TypeError, ValueError):
            return False
