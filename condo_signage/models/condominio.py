from datetime import datetime
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from condo_signage.db import Base

class Condominio(Base):
    __tablename__ = "condominio"
    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String, nullable=False)
    sindico_id = Column(Integer, ForeignKey("user.id"), nullable=True)
    cep = Column(String(8), nullable=False)
    localizacao = Column(String, nullable=False, default="")
    data_registro = Column(DateTime, default=datetime.utcnow)
