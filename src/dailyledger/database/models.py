"""SQLAlchemy models for the dailyledger database.

Column names follow the ledger's persisted schema (saldo_anterior, entradas,
saidas, taxas, saldo_atual, ...) so existing data can be read as is.
"""

from datetime import datetime, UTC
from sqlalchemy import (
    BigInteger,
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    DateTime,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

MONEY = Numeric(15, 2)


class DailyEntry(Base):
    """One explicitly recorded day."""

    __tablename__ = "financial_data"

    id = Column(Integer, primary_key=True)
    date = Column(String(10), unique=True, nullable=False)  # dd/mm/yyyy
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    # Relationships
    accounts = relationship(
        "AccountEntry",
        back_populates="daily_entry",
        cascade="all, delete-orphan",
        order_by="AccountEntry.position",
    )


class AccountEntry(Base):
    """One account's figures on one day."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    financial_data_id = Column(Integer, ForeignKey("financial_data.id"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String(255), nullable=False)
    saldo_anterior = Column(MONEY, nullable=False, default=0)
    entradas = Column(MONEY, nullable=False, default=0)
    saidas = Column(MONEY, nullable=False, default=0)
    taxas = Column(MONEY, nullable=False, default=0)
    saldo_atual = Column(MONEY, nullable=False, default=0)
    nota = Column(Text, nullable=True)
    entradas_detalhadas = Column(Text, nullable=True)  # JSON array of transactions
    saidas_detalhadas = Column(Text, nullable=True)  # JSON array of transactions
    entradas_base = Column(MONEY, nullable=True)
    saidas_base = Column(MONEY, nullable=True)
    campos_sensiveis = Column(Text, nullable=True)  # JSON array of field names
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    daily_entry = relationship("DailyEntry", back_populates="accounts")


class AuditLog(Base):
    """Audit log entry."""

    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True)
    timestamp = Column(BigInteger, nullable=False)  # milliseconds since epoch
    action = Column(String(50), nullable=False)
    entity = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    user = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
