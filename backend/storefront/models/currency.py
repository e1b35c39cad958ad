"""Currency reference table (ISO 4217), seeded from `storefront.data.currencies`."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from storefront.database import Base


class Currency(Base):
    __tablename__ = "currencies"

    # Lowercase ISO 4217 code, e.g. "usd"
    code: Mapped[str] = mapped_column(String(3), primary_key=True)
    symbol: Mapped[str] = mapped_column(String(16), nullable=False)
    symbol_native: Mapped[str] = mapped_column(String(16), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Currency(code='{self.code}')>"
