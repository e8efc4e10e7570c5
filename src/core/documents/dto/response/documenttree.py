from pydantic import BaseModel
from typing import List, Literal, Optional

BlockKind = Literal[
    "header", "billed_to", "journey", "route", "usage", "charges", "total", "signature", "footer"
]


class DocumentRow(BaseModel):
    label: str
    value: str
    emphasis: bool = False


class RouteNode(BaseModel):
    kind: Literal["pickup", "stop", "drop"]
    location: str
    city: Optional[str] = None


class DocumentBlock(BaseModel):
    kind: BlockKind
    title: Optional[str] = None
    lines: List[str] = []
    rows: List[DocumentRow] = []
    nodes: List[RouteNode] = []


class DocumentTree(BaseModel):
    invoice_id: Optional[str] = None
    invoice_number: str
    title: str = "INVOICE"
    blocks: List[DocumentBlock]

    def block(self, kind: str) -> Optional[DocumentBlock]:
        return next((b for b in self.blocks if b.kind == kind), None)
