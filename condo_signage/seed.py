from datetime import date, timedelta
from sqlalchemy.orm import Session
from condo_signage.db import SessionLocal, Base, engine
from condo_signage.models.anuncio import Anuncio
from condo_signage.models.aviso import Aviso
from condo_signage.models.condominio import Condominio
from condo_signage.models.tv import TV
from condo_signage.models.user import User
from condo_signage.services.status import sync_status


def seed() -> None:
    Base.metadata.create_all(bind=engine)
    db: Session = SessionLocal()
    try:
        admin = User(nome="Administrador", email="admin@example.com", tipo="ADM", limite_avisos=0)
        sindico = User(nome="Síndico Demo", email="sindico@example.com", tipo="sindico", limite_avisos=10)
        db.add(admin)
        db.add(sindico)
        db.commit()
        db.refresh(sindico)

        condominio = Condominio(
            nome="Residencial Demo",
            sindico_id=sindico.id,
            cep="01310100",
            localizacao="Av. Paulista, São Paulo - SP",
        )
        db.add(condominio)
        db.commit()
        db.refresh(condominio)

        tv_hall = TV(nome="TV Hall", codigo_conexao="HALL-0001", template="Template 1", condominio_id=condominio.id)
        tv_elevator = TV(
            nome="TV Elevador",
            codigo_conexao="ELEV-0001",
            template="Template 2",
            condominio_id=condominio.id,
            proporcao_avisos=1,
            proporcao_anuncios=5,
            proporcao_noticias=3,
        )
        db.add(tv_hall)
        db.add(tv_elevator)

        anuncio = Anuncio(
            nome="Padaria do Bairro",
            nome_anunciante="Padaria do Bairro LTDA",
            numero_anunciante="11999990000",
            data_expiracao=date.today() + timedelta(days=30),
            condominios_ids=str(condominio.id),
            archive_url="https://example.com/media/padaria.png",
            tempo_exibicao=10,
        )
        aviso = Aviso(
            nome="Manutenção da piscina",
            mensagem="A piscina ficará fechada para manutenção no sábado.",
            condominios_ids=str(condominio.id),
            sindico_ids=str(sindico.id),
            sindico_id=sindico.id,
            condominio_id=condominio.id,
            data_expiracao=date.today() + timedelta(days=7),
        )
        sync_status(anuncio)
        sync_status(aviso)
        db.add(anuncio)
        db.add(aviso)
        db.commit()
    finally:
        db.close()


if __name__ == "__main__":
    seed()
