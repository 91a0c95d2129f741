import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column
from flagdash.db.base import Base

class KvEntry(Base):
    __tablename__ = "kv_entries"

    key: Mapped[str] = mapped_column(sa.Text, primary_key=True)
    value: Mapped[str] = mapped_column(sa.Text, nullable=False)

    updated_at: Mapped[sa.DateTime] = mapped_column(sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())
