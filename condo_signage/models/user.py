from datetime import datetime
from sqlalchemy import Column, DateTime, Integer, String
from condo_signage.db import Base

class User(Base):
    __tablename__ = "user"
    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)
    telefone = Column(String, nullable=True)
    tipo = Column(String(16), nullable=False, default="sindico")  # ADM | sindico
    limite_avisos = Column(Integer, nullable=False, default=10)
    data_criacao = Column(DateTime, default=datetime.utcnow)
    data_update = Column(DateTime, nullable=True, onupdate=datetime.utcnow)
