"""
Inventory API views for Warehouse Stock Backend.
"""
from django.http import HttpResponse
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response
from apps.api.serializers import (
    DeletionCountSerializer, ProductCreateSerializer, ProductQuerySerializer, ProductSerializer,
    ProductUpdateSerializer, ScanSerializer, StockUpdateSerializer
)
from apps.core.results import ServiceResult
from apps.inventory.services.barcode_service import BarcodeService
from apps.inventory.services.deletion_ledger import DeletionLedger
from apps.inventory.services.pdf_service import PDFService
from apps.inventory.services.product_service import ProductService
from apps.inventory.services.stock_service import StockService


def error_response(result: ServiceResult) -> Response:
    return Response({'error': result.message}, status=result.status)


def product_response(result: ServiceResult) -> Response:
    """Render a product result, or its error."""
    if not result.ok:
        return error_response(result)

    body = {'product': ProductSerializer(result.data).data}
    if result.message:
        body['message'] = result.message
    return Response(body, status=result.status)


@api_view(['GET', 'POST'])
def product_list(request):
    """
    List products with search and sorting.
    Create a new product with its first stock entry.
    """
    if request.method == 'GET':
        query = ProductQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)

        products = ProductService.list_products(
            search=query.validated_data['search'],
            sort_by=query.validated_data['sort']
        )
        return Response({
            'count': len(products),
            'results': ProductSerializer(products, many=True).data
        })

    serializer = ProductCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    data = dict(serializer.validated_data)
    initial_stock = data.pop('stock')
    result = ProductService.create_product(data, initial_stock, acting_id=request.user.id)
    return product_response(result)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
def product_detail(request, product_id):
    """
    Retrieve a product with its stock breakdown, edit it or delete it.
    """
    if request.method == 'GET':
        result = ProductService.get_product(product_id)
        if not result.ok:
            return error_response(result)
        return Response({
            'product': ProductSerializer(result.data).data,
            'stock_summary': ProductService.stock_summary(result.data)
        })

    if request.method == 'DELETE':
        result = ProductService.delete_product(product_id)
        if not result.ok:
            return error_response(result)
        return Response({'message': result.message})

    serializer = ProductUpdateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    result = ProductService.update_product(product_id, serializer.validated_data, acting_id=request.user.id)
    return product_response(result)


@api_view(['POST'])
def update_stock(request, product_id, stock_id):
    """
    Add or remove units on one stock entry.
    """
    serializer = StockUpdateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    result = StockService.update_stock(
        product_id=product_id,
        stock_id=stock_id,
        quantity=serializer.validated_data['quantity'],
        is_adding=serializer.validated_data['operation'] == 'add',
        acting_id=request.user.id
    )
    return product_response(result)


@api_view(['POST'])
def scan(request):
    """
    Resolve a scanned barcode to a product.
    """
    serializer = ScanSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    result = BarcodeService.scan(serializer.validated_data['barcode'])
    if not result.ok:
        return error_response(result)

    return Response({
        'product_id': result.data.id,
        'product': ProductSerializer(result.data).data
    })


@api_view(['GET'])
def export_product_pdf(request, product_id):
    """
    Download a PDF sheet of a product and its stock locations.
    """
    result = ProductService.get_product(product_id)
    if not result.ok:
        return error_response(result)

    product = result.data
    editor_name = None
    if product.edited_by and product.edited_by.warehouseman_id == request.user.id:
        editor_name = request.user.name

    pdf = PDFService.create_product_pdf(product, editor_name=editor_name)
    response = HttpResponse(pdf, content_type='application/pdf')
    response['Content-Disposition'] = f'attachment; filename="product_{product.id}.pdf"'
    return response


@api_view(['GET'])
def product_label(request, product_id):
    """
    Download a QR label encoding the product barcode.
    """
    result = ProductService.get_product(product_id)
    if not result.ok:
        return error_response(result)

    png = BarcodeService.render_label_png(result.data)
    response = HttpResponse(png, content_type='image/png')
    response['Content-Disposition'] = f'inline; filename="label_{result.data.barcode}.png"'
    return response


@api_view(['GET'])
def deletion_ledger(request):
    """
    Deletion counts per product name, most deleted first.
    """
    entries = DeletionLedger.all()
    return Response({'results': DeletionCountSerializer(entries, many=True).data})
