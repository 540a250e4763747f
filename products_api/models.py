# products_api/models.py
from typing import Any, Dict, Union

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    price: Union[int, float]
    category: str
    in_stock: bool = Field(True, alias="inStock")

    def to_dict(self) -> Dict[str, Any]:
        # wire format uses camelCase inStock
        return self.model_dump(by_alias=True)
