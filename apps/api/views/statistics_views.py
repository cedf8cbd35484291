"""
Statistics API views for Warehouse Stock Backend.
"""
from django.http import HttpResponse
from django.utils import timezone
from rest_framework.decorators import api_view
from rest_framework.response import Response
from apps.api.serializers import StatisticsSerializer
from apps.inventory.services.pdf_service import PDFService
from apps.inventory.services.statistics_service import StatisticsService


@api_view(['GET'])
def statistics(request):
    """
    Aggregate figures over the whole product collection.
    """
    stats = StatisticsService.get_statistics()
    return Response(StatisticsSerializer(stats).data)


@api_view(['GET'])
def export_statistics_pdf(request):
    """
    Download the statistics as a PDF summary.
    """
    stats = StatisticsService.get_statistics()
    pdf = PDFService.create_statistics_pdf(stats)

    response = HttpResponse(pdf, content_type='application/pdf')
    filename = f"statistics_{timezone.now():%Y%m%d}.pdf"
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response
