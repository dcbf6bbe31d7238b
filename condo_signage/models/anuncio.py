from sqlalchemy import Column, Date, Integer, String, Text
from condo_signage.db import Base

class Anuncio(Base):
    __tablename__ = "anuncio"
    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String, nullable=False)
    nome_anunciante = Column(String, nullable=False)
    numero_anunciante = Column(String, nullable=True)
    data_expiracao = Column(Date, nullable=False)
    condominios_ids = Column(Text, nullable=False, default="")  # CSV of condominio ids
    status = Column(String(16), nullable=False, default="ativo")  # derived from data_expiracao
    archive_url = Column(String, nullable=True)
    tempo_exibicao = Column(Integer, default=10)
