"""
Inventory records for Warehouse Stock Backend.

Products are owned by the remote store; these dataclasses convert between
the store's camelCase JSON and Python objects.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from django.utils import timezone


def now_iso() -> str:
    """Current UTC time in the store's timestamp format."""
    return timezone.now().isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def unmodelled(data: Dict[str, Any], known: Tuple[str, ...]) -> Dict[str, Any]:
    """Store fields the record does not model, kept so a full PUT preserves them."""
    return {k: v for k, v in data.items() if k not in known}


def to_decimal(value: Any) -> Decimal:
    if value is None or value == '':
        return Decimal('0')
    return Decimal(str(value))


@dataclass
class Location:
    city: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    extra: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    FIELDS = ('city', 'latitude', 'longitude')

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'Location':
        data = data or {}
        return cls(
            city=data.get('city') or "",
            latitude=float(data.get('latitude') or 0),
            longitude=float(data.get('longitude') or 0),
            extra=unmodelled(data, cls.FIELDS),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.extra,
            'city': self.city,
            'latitude': self.latitude,
            'longitude': self.longitude,
        }


@dataclass
class Stock:
    """A quantity of a product held at one location."""
    id: int
    name: str = ""
    quantity: int = 0
    localisation: Location = field(default_factory=Location)
    extra: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    FIELDS = ('id', 'name', 'quantity', 'localisation')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Stock':
        return cls(
            id=data.get('id'),
            name=data.get('name') or "",
            quantity=int(data.get('quantity') or 0),
            localisation=Location.from_dict(data.get('localisation')),
            extra=unmodelled(data, cls.FIELDS),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.extra,
            'id': self.id,
            'name': self.name,
            'quantity': self.quantity,
            'localisation': self.localisation.to_dict(),
        }


@dataclass
class EditHistory:
    """Last editor of a product. Only the most recent edit is kept."""
    warehouseman_id: int
    at: str

    @classmethod
    def stamp(cls, warehouseman_id: int) -> 'EditHistory':
        return cls(warehouseman_id=warehouseman_id, at=now_iso())

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['EditHistory']:
        if not data:
            return None
        return cls(warehouseman_id=data.get('warehouseManId'), at=data.get('at') or "")

    def to_dict(self) -> Dict[str, Any]:
        return {'warehouseManId': self.warehouseman_id, 'at': self.at}


@dataclass
class Product:
    id: Any
    name: str
    type: str = ""
    barcode: str = ""
    price: Decimal = Decimal('0')
    supplier: str = ""
    image: str = ""
    sold: int = 0
    stocks: List[Stock] = field(default_factory=list)
    edited_by: Optional[EditHistory] = None
    extra: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    FIELDS = ('id', 'name', 'type', 'barcode', 'price', 'supplier', 'image', 'sold', 'stocks', 'editedBy')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Product':
        return cls(
            id=data.get('id'),
            name=data.get('name') or "",
            type=data.get('type') or "",
            barcode=str(data.get('barcode') or ""),
            price=to_decimal(data.get('price')),
            supplier=data.get('supplier') or "",
            image=data.get('image') or "",
            sold=int(data.get('sold') or 0),
            # The store may hold null entries in the list
            stocks=[Stock.from_dict(s) for s in (data.get('stocks') or []) if s],
            edited_by=EditHistory.from_dict(data.get('editedBy')),
            extra=unmodelled(data, cls.FIELDS),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            **self.extra,
            'name': self.name,
            'type': self.type,
            'barcode': self.barcode,
            'price': float(self.price),
            'supplier': self.supplier,
            'image': self.image,
            'sold': self.sold,
            'stocks': [s.to_dict() for s in self.stocks],
            'editedBy': self.edited_by.to_dict() if self.edited_by else None,
        }
        if self.id is not None:
            data = {'id': self.id, **data}
        return data

    @property
    def total_quantity(self) -> int:
        return sum(stock.quantity for stock in self.stocks)

    def find_stock(self, stock_id: Any) -> Optional[Stock]:
        # Ids arrive as path strings or JSON numbers
        for stock in self.stocks:
            if str(stock.id) == str(stock_id):
                return stock
        return None


@dataclass
class DeletionCount:
    """Local tally of deletions, keyed by product name."""
    product_name: str
    count: int = 0
    last_deleted: str = ""


@dataclass
class Statistics:
    total_products: int = 0
    total_cities: int = 0
    out_of_stock_products: int = 0
    total_inventory_value: Decimal = Decimal('0')
    most_stocked_products: List[str] = field(default_factory=list)
    most_sold_products: List[str] = field(default_factory=list)
