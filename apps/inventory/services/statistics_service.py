"""
Statistics service for Warehouse Stock Backend.
"""
import logging
from decimal import Decimal
from typing import List, Optional

from django.conf import settings
from apps.core.store_client import ProductStoreClient
from apps.inventory.entities import Product, Statistics
from apps.inventory.services.product_service import ProductService

logger = logging.getLogger(__name__)


class StatisticsService:
    """
    Aggregates over the whole product collection.
    Nothing is cached: each call fetches and scans every product again.
    """

    @staticmethod
    def get_statistics(client: Optional[ProductStoreClient] = None) -> Statistics:
        products = ProductService.get_all_products(client)
        stats = StatisticsService.compute(products)

        logger.debug("Statistics computed", extra={
            'total_products': stats.total_products,
            'event_type': 'statistics_computed'
        })
        return stats

    @staticmethod
    def compute(products: List[Product]) -> Statistics:
        limit = settings.STOCK_SYSTEM.get('TOP_PRODUCTS_LIMIT', 5)

        cities = set()
        out_of_stock = 0
        total_value = Decimal('0')

        for product in products:
            for stock in product.stocks:
                if stock.localisation.city:
                    cities.add(stock.localisation.city)
            if StatisticsService.is_out_of_stock(product):
                out_of_stock += 1
            total_value += StatisticsService.calculate_product_value(product)

        # sorted() is stable: ties keep store order
        by_stock = sorted(products, key=lambda p: p.total_quantity, reverse=True)
        by_sold = sorted(products, key=lambda p: p.sold, reverse=True)

        return Statistics(
            total_products=len(products),
            total_cities=len(cities),
            out_of_stock_products=out_of_stock,
            total_inventory_value=total_value,
            most_stocked_products=[p.name for p in by_stock[:limit]],
            most_sold_products=[f"{p.name} ({p.sold})" for p in by_sold[:limit] if p.sold > 0],
        )

    @staticmethod
    def calculate_product_value(product: Product) -> Decimal:
        return product.total_quantity * product.price

    @staticmethod
    def is_out_of_stock(product: Product) -> bool:
        return all(stock.quantity == 0 for stock in product.stocks)
