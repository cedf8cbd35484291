"""
Stock service for Warehouse Stock Backend.
Handles stock quantity movements on a product's stock entries.
"""
import logging
from typing import Any, Optional

from django.conf import settings
from apps.core.results import ServiceResult
from apps.core.store_client import ProductStoreClient, get_store_client
from apps.inventory.entities import EditHistory, Product
from apps.inventory.services.product_service import ProductService, product_path, resolve_editor

logger = logging.getLogger(__name__)


class StockService:
    """Service class for stock quantity updates."""

    @staticmethod
    def update_stock(
        product_id: Any,
        stock_id: Any,
        quantity: int,
        is_adding: bool,
        acting_id: Optional[int] = None,
        client: Optional[ProductStoreClient] = None
    ) -> ServiceResult:
        """
        Add or remove units on one stock entry of a product.

        Reads the product, applies the delta, then writes the whole product
        back. The store has no version field: a concurrent writer between the
        read and the write is silently overwritten (last write wins). With
        STOCK_SYSTEM['VERIFY_BEFORE_WRITE'] the product is read again just
        before writing and the update is refused if it changed, which narrows
        that window without closing it.

        Args:
            product_id: Product holding the stock
            stock_id: Stock entry to update
            quantity: Number of units to move (positive integer)
            is_adding: True to add units, False to remove them
            acting_id: Warehouseman performing the movement
            client: Store client, defaults to the configured one

        Returns:
            200 result with the updated product, or a 400/404/409 result
            when nothing was written
        """
        client = client or get_store_client()

        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            return ServiceResult.invalid("Quantity must be a positive number")

        current = ProductService.get_product(product_id, client)
        if not current.ok:
            return current
        product: Product = current.data

        stock = product.find_stock(stock_id)
        if stock is None:
            return ServiceResult.not_found("Stock not found for this product")

        old_quantity = stock.quantity
        if is_adding:
            new_quantity = old_quantity + quantity
        else:
            if quantity > old_quantity:
                logger.info("Refused stock removal above available quantity", extra={
                    'product_id': product.id,
                    'stock_id': stock.id,
                    'available': old_quantity,
                    'requested': quantity,
                    'event_type': 'stock_insufficient'
                })
                return ServiceResult.invalid("Insufficient stock quantity")
            new_quantity = old_quantity - quantity

        if settings.STOCK_SYSTEM.get('VERIFY_BEFORE_WRITE'):
            if StockService._changed_since_read(product, stock_id, old_quantity, client):
                return ServiceResult.conflict("Product was modified by someone else, please retry")

        stock.quantity = new_quantity
        product.edited_by = EditHistory.stamp(resolve_editor(acting_id))

        response = client.put(product_path(product.id), product.to_dict())

        logger.info("Stock updated", extra={
            'product_id': product.id,
            'stock_id': stock.id,
            'balance_before': old_quantity,
            'balance_after': new_quantity,
            'warehouseman_id': product.edited_by.warehouseman_id,
            'event_type': 'stock_added' if is_adding else 'stock_removed'
        })

        message = "Stock added successfully" if is_adding else "Stock removed successfully"
        return ServiceResult.success(Product.from_dict(response.data), message, status=response.status)

    @staticmethod
    def _changed_since_read(
        product: Product,
        stock_id: Any,
        read_quantity: int,
        client: ProductStoreClient
    ) -> bool:
        latest = ProductService.get_product(product.id, client)
        if not latest.ok:
            return True

        fresh: Product = latest.data
        fresh_stock = fresh.find_stock(stock_id)
        if fresh_stock is None or fresh_stock.quantity != read_quantity:
            return True

        before = product.edited_by.to_dict() if product.edited_by else None
        after = fresh.edited_by.to_dict() if fresh.edited_by else None
        return before != after
