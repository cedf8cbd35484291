"""
PDF exports for products and inventory statistics.
"""
from io import BytesIO
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.graphics.barcode.qr import QrCodeWidget
from reportlab.graphics.shapes import Drawing
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from apps.inventory.entities import Product, Statistics

TABLE_STYLE = TableStyle([
    ('BACKGROUND', (0, 0), (-1, 0), colors.lightgrey),
    ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
    ('ALIGN', (1, 1), (-1, -1), 'RIGHT'),
    ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
])


def _document(buffer: BytesIO) -> SimpleDocTemplate:
    return SimpleDocTemplate(buffer, pagesize=A4, leftMargin=15*mm, rightMargin=15*mm, topMargin=15*mm, bottomMargin=15*mm)


def _qr_drawing(value: str, size: float = 35*mm) -> Drawing:
    widget = QrCodeWidget(value)
    x1, y1, x2, y2 = widget.getBounds()
    drawing = Drawing(size, size, transform=[size / (x2 - x1), 0, 0, size / (y2 - y1), 0, 0])
    drawing.add(widget)
    return drawing


class PDFService:
    @staticmethod
    def create_product_pdf(product: Product, editor_name: Optional[str] = None) -> bytes:
        buffer = BytesIO()
        doc = _document(buffer)
        styles = getSampleStyleSheet()
        story = []
        story.append(Paragraph(escape(product.name), styles['Title']))
        story.append(Paragraph(escape(product.type), styles['Italic']))
        story.append(Spacer(1, 12))
        story.append(Paragraph(f"Price: ${product.price:.2f}", styles['Normal']))
        story.append(Paragraph(f"Total Stock: {product.total_quantity} units", styles['Normal']))
        story.append(Paragraph(f"Supplier: {escape(product.supplier)}", styles['Normal']))
        story.append(Paragraph(f"Barcode: {escape(product.barcode)}", styles['Normal']))
        story.append(Spacer(1, 12))

        story.append(Paragraph("Stock Locations", styles['Heading2']))
        rows = [["Location", "City", "Quantity"]]
        rows += [[s.name, s.localisation.city, f"{s.quantity} units"] for s in product.stocks]
        table = Table(rows, colWidths=[70*mm, 60*mm, 40*mm])
        table.setStyle(TABLE_STYLE)
        story.append(table)
        story.append(Spacer(1, 12))

        if product.barcode:
            story.append(_qr_drawing(product.barcode))
            story.append(Spacer(1, 12))

        if product.edited_by:
            editor = editor_name or f"#{product.edited_by.warehouseman_id}"
            story.append(Paragraph(f"Last updated: {product.edited_by.at} by {escape(editor)}", styles['Normal']))

        doc.build(story)
        buffer.seek(0)
        return buffer.getvalue()

    @staticmethod
    def create_statistics_pdf(statistics: Statistics) -> bytes:
        buffer = BytesIO()
        doc = _document(buffer)
        styles = getSampleStyleSheet()
        story = []
        story.append(Paragraph("Inventory Statistics", styles['Title']))
        story.append(Spacer(1, 12))

        figures = [
            ["Figure", "Value"],
            ["Total products", str(statistics.total_products)],
            ["Cities", str(statistics.total_cities)],
            ["Out of stock products", str(statistics.out_of_stock_products)],
            ["Total inventory value", f"${statistics.total_inventory_value:.2f}"],
        ]
        table = Table(figures, colWidths=[100*mm, 60*mm])
        table.setStyle(TABLE_STYLE)
        story.append(table)

        for title, names in (
            ("Most stocked products", statistics.most_stocked_products),
            ("Most sold products", statistics.most_sold_products),
        ):
            story.append(Spacer(1, 12))
            story.append(Paragraph(title, styles['Heading2']))
            if not names:
                story.append(Paragraph("None", styles['Normal']))
            for position, name in enumerate(names, start=1):
                story.append(Paragraph(f"{position}. {escape(name)}", styles['Normal']))

        doc.build(story)
        buffer.seek(0)
        return buffer.getvalue()
