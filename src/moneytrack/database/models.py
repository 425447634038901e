"""SQLAlchemy models for moneytrack database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

MONEY = Numeric(12, 2)


class Account(Base):
    """Account model. ``balance`` caches the replayed balance."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    kind = Column(String, nullable=False)
    payment_type = Column(String, nullable=True)
    initial_balance = Column(MONEY, nullable=False)
    balance = Column(MONEY, nullable=False)
    credit_limit = Column(MONEY, nullable=True)
    has_installments = Column(Boolean, default=False, nullable=False)
    total_installments = Column(Integer, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_account_user_name"),)

    # Relationships
    transactions = relationship("Transaction", back_populates="account", passive_deletes="all")
    installments = relationship("Installment", back_populates="account", passive_deletes="all")


class Category(Base):
    """Category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    description = Column(String, nullable=True)
    is_default = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_category_user_name"),)

    # Relationships
    transactions = relationship("Transaction", back_populates="category", passive_deletes="all")


class Installment(Base):
    """Installment (scheduled due) model."""

    __tablename__ = "installments"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    installment_number = Column(Integer, nullable=False)
    amount = Column(MONEY, nullable=False)
    remaining_amount = Column(MONEY, nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        UniqueConstraint("account_id", "installment_number", name="uq_account_installment_number"),
    )

    # Relationships
    account = relationship("Account", back_populates="installments")
    transactions = relationship("Transaction", back_populates="installment")


class Transaction(Base):
    """Transaction model. ``amount`` is always positive."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    installment_id = Column(Integer, ForeignKey("installments.id"), nullable=True)
    date = Column(Date, nullable=False)
    amount = Column(MONEY, nullable=False)
    type = Column(String, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    account = relationship("Account", back_populates="transactions")
    category = relationship("Category", back_populates="transactions")
    installment = relationship("Installment", back_populates="transactions")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine: Engine = create_engine(database_url, echo=False)
    if engine.dialect.name == "sqlite":
        # SQLite only enforces foreign keys when asked to, per connection
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
