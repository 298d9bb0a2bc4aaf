"""Record types shared by the test-suite."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, List, Optional, Union

from pydantic import BaseModel

from datamirror.domain.sentinels import Sentinel


@dataclass
class Customer:
    name: str = ""
    age: int = 0
    balance: float = 0.0
    city: Optional[str] = None


@dataclass
class Order:
    order_pkid: Union[int, Sentinel] = 0
    customer_id: Union[int, Sentinel] = 0
    amount: Union[float, Sentinel] = 0.0
    created: str = ""
    note: str = ""


class MixedCase:
    """Plain annotated class; only apple / Banana / cherry are mapped."""

    apple: str
    Banana: int
    cherry: float
    flag: bool
    tags: List[str]
    _hidden: str
    registry: ClassVar[str] = "ignored"

    def __init__(self) -> None:
        self.apple = ""
        self.Banana = 0
        self.cherry = 0.0
        self.flag = False
        self.tags = []
        self._hidden = "secret"


class Product(BaseModel):
    sku: str = ""
    price: float = 0.0
    stock: int = 0
    released: Optional[str] = None


@dataclass
class Timestamps:
    created_at: Optional[datetime] = None
    active: bool = True


@dataclass
class NeedsArguments:
    name: str


__all__ = ["Customer", "MixedCase", "NeedsArguments", "Order", "Product", "Timestamps"]
