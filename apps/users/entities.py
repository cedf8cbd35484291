"""
Warehouseman record for Warehouse Stock Backend.
"""
from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class Warehouseman:
    """
    Warehouse worker as stored in the remote store.
    Acts as the authenticated user of the API.
    """
    id: int
    name: str = ""
    dob: str = ""
    city: str = ""
    secret_key: str = ""
    warehouse_id: Any = None

    # DRF treats any object with these attributes as a user
    is_authenticated = True
    is_anonymous = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Warehouseman':
        return cls(
            id=data['id'],
            name=data.get('name') or "",
            dob=data.get('dob') or "",
            city=data.get('city') or "",
            secret_key=data.get('secretKey') or "",
            warehouse_id=data.get('warehouseId'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'dob': self.dob,
            'city': self.city,
            'secretKey': self.secret_key,
            'warehouseId': self.warehouse_id,
        }
