"""SQLAlchemy models for dompet database."""

import uuid
from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Enum,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

from dompet.domain.entities import TransactionType

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(UTC)


class Category(Base):
    """Transaction category model."""

    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    type = Column(Enum(TransactionType, values_callable=lambda e: [m.value for m in e]), nullable=False)
    color = Column(String, nullable=True)
    icon = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)

    transactions = relationship("Transaction", back_populates="category")


class BankAccount(Base):
    """Bank account model."""

    __tablename__ = "bank_accounts"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String, nullable=False, index=True)
    account_name = Column(String, nullable=False)
    bank_name = Column(String, nullable=False)
    account_number = Column(String, nullable=True)
    balance = Column(Numeric(18, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    transactions = relationship("Transaction", back_populates="bank_account")


class Asset(Base):
    """Asset model."""

    __tablename__ = "assets"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String, nullable=False, index=True)
    asset_name = Column(String, nullable=False)
    asset_type = Column(String, nullable=False)
    purchase_value = Column(Numeric(18, 2), nullable=False)
    current_value = Column(Numeric(18, 2), nullable=False)
    purchase_date = Column(Date, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String, nullable=False, index=True)
    category_id = Column(String(36), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    bank_account_id = Column(
        String(36), ForeignKey("bank_accounts.id", ondelete="SET NULL"), nullable=True
    )
    type = Column(Enum(TransactionType, values_callable=lambda e: [m.value for m in e]), nullable=False)
    amount = Column(Numeric(18, 2), nullable=False)
    description = Column(String, nullable=True)
    transaction_date = Column(Date, nullable=False, index=True)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    # Relationships
    category = relationship("Category", back_populates="transactions")
    bank_account = relationship("BankAccount", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
