"""
Serializers for Warehouse Stock Backend API.
"""
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers
from apps.inventory.services.product_service import SORT_KEYS


# Authentication Serializers

class LoginSerializer(serializers.Serializer):
    """Serializer for secret-code login."""
    secret_key = serializers.CharField(
        write_only=True,
        trim_whitespace=True,
        error_messages={'blank': _('Please enter your secret code')}
    )


class WarehousemanSerializer(serializers.Serializer):
    """Warehouseman without the secret code."""
    id = serializers.ReadOnlyField()
    name = serializers.CharField(read_only=True)
    dob = serializers.CharField(read_only=True)
    city = serializers.CharField(read_only=True)
    warehouse_id = serializers.ReadOnlyField()


# Inventory Serializers

class LocationSerializer(serializers.Serializer):
    city = serializers.CharField(allow_blank=True, default='')
    latitude = serializers.FloatField(default=0.0)
    longitude = serializers.FloatField(default=0.0)


class StockSerializer(serializers.Serializer):
    """Serializer for a stock entry."""
    id = serializers.ReadOnlyField()
    name = serializers.CharField(read_only=True)
    quantity = serializers.IntegerField(read_only=True)
    localisation = LocationSerializer(read_only=True)


class EditHistorySerializer(serializers.Serializer):
    warehouseman_id = serializers.ReadOnlyField()
    at = serializers.CharField(read_only=True)


class ProductSerializer(serializers.Serializer):
    """Serializer for Product records."""
    id = serializers.ReadOnlyField()
    name = serializers.CharField(read_only=True)
    type = serializers.CharField(read_only=True)
    barcode = serializers.CharField(read_only=True)
    price = serializers.DecimalField(max_digits=None, decimal_places=2, coerce_to_string=False, read_only=True)
    supplier = serializers.CharField(read_only=True)
    image = serializers.CharField(read_only=True)
    sold = serializers.IntegerField(read_only=True)
    total_quantity = serializers.IntegerField(read_only=True)
    stocks = StockSerializer(many=True, read_only=True)
    edited_by = EditHistorySerializer(read_only=True, allow_null=True)


class InitialStockSerializer(serializers.Serializer):
    """First stock entry of a new product."""
    name = serializers.CharField(max_length=200)
    quantity = serializers.IntegerField(min_value=0)
    localisation = LocationSerializer(required=False)


class ProductCreateSerializer(serializers.Serializer):
    """Serializer for product creation."""
    name = serializers.CharField(max_length=200)
    type = serializers.CharField(max_length=100)
    barcode = serializers.CharField(max_length=100)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    supplier = serializers.CharField(max_length=200)
    image = serializers.CharField(allow_blank=True, required=False, default='')
    stock = InitialStockSerializer()


class StockEditSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField(max_length=200, required=False)
    quantity = serializers.IntegerField(min_value=0, required=False)


class ProductUpdateSerializer(serializers.Serializer):
    """Serializer for product edition. Every field is optional."""
    name = serializers.CharField(max_length=200, required=False)
    type = serializers.CharField(max_length=100, required=False)
    barcode = serializers.CharField(max_length=100, required=False)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    supplier = serializers.CharField(max_length=200, required=False)
    image = serializers.CharField(allow_blank=True, required=False)
    stocks = StockEditSerializer(many=True, required=False)


class ProductQuerySerializer(serializers.Serializer):
    """Query parameters of the product list."""
    search = serializers.CharField(required=False, allow_blank=True, default='')
    sort = serializers.ChoiceField(choices=SORT_KEYS, required=False, default='name')


class StockUpdateSerializer(serializers.Serializer):
    """Serializer for adding or removing units on a stock entry."""
    OPERATIONS = ['add', 'remove']

    quantity = serializers.IntegerField(
        min_value=1,
        error_messages={'min_value': _('Please enter a valid quantity number')}
    )
    operation = serializers.ChoiceField(choices=OPERATIONS)


class ScanSerializer(serializers.Serializer):
    barcode = serializers.CharField(max_length=100)


class StatisticsSerializer(serializers.Serializer):
    total_products = serializers.IntegerField()
    total_cities = serializers.IntegerField()
    out_of_stock_products = serializers.IntegerField()
    total_inventory_value = serializers.DecimalField(max_digits=None, decimal_places=2, coerce_to_string=False)
    most_stocked_products = serializers.ListField(child=serializers.CharField())
    most_sold_products = serializers.ListField(child=serializers.CharField())


class DeletionCountSerializer(serializers.Serializer):
    product_name = serializers.CharField()
    count = serializers.IntegerField()
    last_deleted = serializers.CharField()
