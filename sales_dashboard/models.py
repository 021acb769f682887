"""Record types shared by services and state."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

# Backend column -> dataframe column
BACKEND_COLUMNS: Dict[str, str] = {
    "id": "id",
    "valor_venda": "value",
    "data_venda": "sale_date",
    "detalhes_tipoPagamento": "payment_detail",
    "id_pipedrive": "partner_id",
    "nome_parceiro": "partner_name",
    "item_nome": "item_name",
}
SALES_COLUMNS = list(BACKEND_COLUMNS.values())


@dataclass(frozen=True)
class User:
    """Logged-in user as returned by the ``login`` RPC."""

    id: str
    email: str

    @property
    def display_name(self) -> str:
        """Capitalized local part of the e-mail address."""
        if not self.email:
            return "Usuário"
        name = self.email.split("@")[0]
        return name[:1].upper() + name[1:]

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "email": self.email}

    @classmethod
    def from_row(cls, row: Any) -> Optional["User"]:
        """Build a user from an RPC row, or ``None`` when the row is malformed."""
        if not isinstance(row, dict) or not row.get("id"):
            return None
        return cls(id=str(row["id"]), email=str(row.get("email") or ""))


@dataclass(frozen=True)
class SaleRecord:
    """One sale transaction."""

    id: int
    value: float
    sale_date: str
    payment_detail: str
    partner_id: Optional[int]
    partner_name: str
    item_name: Optional[str] = None

    @classmethod
    def from_backend(cls, row: Dict[str, Any]) -> "SaleRecord":
        """Map a ``vendas_parceiro`` row to a record."""
        partner_id = row.get("id_pipedrive")
        return cls(
            id=int(row["id"]),
            value=float(row.get("valor_venda") or 0.0),
            sale_date=str(row.get("data_venda") or ""),
            payment_detail=str(row.get("detalhes_tipoPagamento") or ""),
            partner_id=int(partner_id) if partner_id is not None else None,
            partner_name=str(row.get("nome_parceiro") or ""),
            item_name=row.get("item_nome"),
        )

    def to_row(self) -> Dict[str, Any]:
        return asdict(self)
