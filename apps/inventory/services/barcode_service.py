"""
Barcode scanning and label service for Warehouse Stock Backend.
"""
import io
from typing import Optional

import qrcode
from apps.core.results import ServiceResult
from apps.core.store_client import ProductStoreClient
from apps.inventory.entities import Product
from apps.inventory.services.product_service import ProductService


class BarcodeService:
    """Service class for scanned barcode lookup and printable labels."""

    @staticmethod
    def normalize(raw: Optional[str]) -> str:
        """Strip scanner noise (whitespace, newlines) around a code."""
        return (raw or "").strip()

    @staticmethod
    def scan(raw: Optional[str], client: Optional[ProductStoreClient] = None) -> ServiceResult:
        """
        Resolve a scanned barcode to a product.

        Returns:
            200 result with the product, 404 when no product has this code,
            400 when the scan is empty
        """
        barcode = BarcodeService.normalize(raw)
        if not barcode:
            return ServiceResult.invalid("Barcode is empty")
        return ProductService.get_product_by_barcode(barcode, client)

    @staticmethod
    def render_label_png(product: Product, size: int = 10, border: int = 4) -> bytes:
        """
        Render a QR label encoding the product barcode.

        Args:
            product: Product to label
            size: QR code size (box_size)
            border: QR code border size

        Returns:
            PNG image as bytes
        """
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=size,
            border=border,
        )
        qr.add_data(product.barcode)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        img_io = io.BytesIO()
        img.save(img_io, format='PNG')
        return img_io.getvalue()
