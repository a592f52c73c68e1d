# medcoord/models/resources.py
from sqlalchemy import Column, Integer, String, Text

from medcoord.db import Base


class Resource(Base):
    """Справочник медицинских ресурсов (препараты, оборудование, персонал)"""
    __tablename__ = "resources"

    id = Column(Integer, primary_key=True)

    name = Column(String(255), nullable=False, index=True)
    type = Column(String(20), nullable=False, index=True)
    description = Column(Text, nullable=True)

    # Порог дефицита: quantity <= critical_level → критический остаток
    critical_level = Column(Integer, nullable=True, default=10)

    # Целевой (рекомендуемый) запас
    recommended_stock = Column(Integer, nullable=True, default=100)

    def __repr__(self) -> str:
        return f"<Resource id={self.id} name={self.name!r} type={self.type!r}>"
