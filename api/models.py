"""
SQLAlchemy models for the FuelEU Ledger database.
"""

from sqlalchemy import (
    Column,
    String,
    Float,
    Integer,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid

from api.database import Base


class ShipCompliance(Base):
    """Compliance balance for one ship-year (overwritten on recompute)."""

    __tablename__ = "ship_compliance"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    ship_id = Column(String(100), nullable=False, index=True)
    year = Column(Integer, nullable=False)
    cb_gco2eq = Column(Float, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    __table_args__ = (
        UniqueConstraint("ship_id", "year", name="uq_ship_compliance_ship_year"),
    )

    def __repr__(self):
        return f"<ShipCompliance(ship_id='{self.ship_id}', year={self.year}, cb={self.cb_gco2eq})>"


class BankEntry(Base):
    """Banking ledger transaction. Rows are appended, never updated by the engine."""

    __tablename__ = "bank_entries"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    ship_id = Column(String(100), nullable=False)
    year = Column(Integer, nullable=False)
    amount_gco2eq = Column(Float, nullable=False)
    is_applied = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    __table_args__ = (
        Index("ix_bank_entries_ship_year", "ship_id", "year"),
        Index("ix_bank_entries_ship_applied", "ship_id", "is_applied"),
    )

    def __repr__(self):
        return (
            f"<BankEntry(ship_id='{self.ship_id}', year={self.year}, "
            f"amount={self.amount_gco2eq}, applied={self.is_applied})>"
        )


class Pool(Base):
    """Compliance pool, created together with its members."""

    __tablename__ = "pools"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    year = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    members = relationship(
        "PoolMember",
        back_populates="pool",
        cascade="all, delete-orphan",
        order_by="PoolMember.position",
    )

    def __repr__(self):
        return f"<Pool(id={self.id}, year={self.year})>"


class PoolMember(Base):
    __tablename__ = "pool_members"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    pool_id = Column(
        UUID(as_uuid=True),
        ForeignKey("pools.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position = Column(Integer, nullable=False, default=0)
    ship_id = Column(String(100), nullable=False)
    cb_before = Column(Float, nullable=False)
    cb_after = Column(Float, nullable=False)

    # Relationships
    pool = relationship("Pool", back_populates="members")

    def __repr__(self):
        return f"<PoolMember(ship_id='{self.ship_id}', before={self.cb_before}, after={self.cb_after})>"


class Route(Base):
    """Voyage route with reported GHG intensity. At most one is the baseline."""

    __tablename__ = "routes"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    route_id = Column(String(50), nullable=False, unique=True, index=True)
    vessel_type = Column(String(100), nullable=False)
    fuel_type = Column(String(50), nullable=False)
    year = Column(Integer, nullable=False)
    ghg_intensity = Column(Float, nullable=False)
    fuel_consumption = Column(Float, nullable=False)
    distance = Column(Float, nullable=False)
    total_emissions = Column(Float, nullable=False)
    is_baseline = Column(Boolean, default=False, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    __table_args__ = (
        Index("ix_routes_filters", "vessel_type", "fuel_type", "year"),
    )

    def __repr__(self):
        return f"<Route(route_id='{self.route_id}', baseline={self.is_baseline})>"
