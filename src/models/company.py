"""Company and Pricing tables."""

from decimal import Decimal

from sqlalchemy import Boolean, Enum, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.domain.company import CostType
from src.models.base import Base, IntegerIDMixin, TimestampMixin


class CompanyRecord(Base, IntegerIDMixin, TimestampMixin):
    """A tenant company owning a set of pricing plans."""

    __tablename__ = "companies"
    __mapper_args__ = {"eager_defaults": True}

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    country: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String, nullable=True)
    address: Mapped[str | None] = mapped_column(String, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Read side only; child rows are written and deleted by the repository
    pricings: Mapped[list["PricingRecord"]] = relationship(
        "PricingRecord",
        order_by="PricingRecord.id",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<Company {self.id} ({self.name})>"


class PricingRecord(Base, IntegerIDMixin, TimestampMixin):
    """One pricing plan of a company."""

    __tablename__ = "pricings"
    __mapper_args__ = {"eager_defaults": True}

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String, nullable=True)
    cost: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    cost_type: Mapped[CostType] = mapped_column(
        Enum(
            CostType,
            name="pricing_cost_type",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        default=CostType.ABSOLUTE,
    )
    is_base_plan: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    company_id: Mapped[int] = mapped_column(
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Pricing {self.id} ({self.name}, {self.cost_type})>"
