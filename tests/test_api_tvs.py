from datetime import date, datetime, timedelta

from condo_signage.api import tv as tv_router
from condo_signage.main import sweep_tv_status
from condo_signage.models.anuncio import Anuncio
from condo_signage.models.tv import TV
from condo_signage.schemas.tv import RotationIn

from helpers import days_from_today


def test_create_tv_uses_default_rotation(make_tv):
    tv = make_tv()
    assert tv["status"] == "offline"
    assert (tv["proporcao_avisos"], tv["proporcao_anuncios"], tv["proporcao_noticias"]) == (1, 5, 3)
    assert tv["template"] == "Template 1"


def test_create_tv_clamps_negative_quotas(make_tv):
    tv = make_tv(proporcao_avisos=-4, proporcao_anuncios=2)
    assert tv["proporcao_avisos"] == 0
    assert tv["proporcao_anuncios"] == 2


def test_duplicate_connection_code_is_rejected(client, make_tv, condominio):
    make_tv(codigo_conexao="SAME")
    response = client.post(
        "/tvs",
        json={"nome": "Other", "codigo_conexao": "SAME", "condominio_id": condominio["id"]},
    )
    assert response.status_code == 400


def test_unknown_condominio_is_404(client):
    response = client.post("/tvs", json={"nome": "TV", "codigo_conexao": "X", "condominio_id": 999})
    assert response.status_code == 404


def test_list_tvs_filters_by_condominio(client, make_tv, condominio):
    make_tv()
    make_tv()
    assert len(client.get("/tvs", params={"condominio_id": condominio["id"]}).json()) == 2
    assert client.get("/tvs", params={"condominio_id": condominio["id"] + 1}).json() == []


def test_update_tv(client, make_tv):
    tv = make_tv()
    response = client.put(f"/tvs/{tv['id']}", json={"nome": "TV Portaria", "template": "Template 2"})
    assert response.status_code == 200
    assert response.json()["nome"] == "TV Portaria"
    assert response.json()["template"] == "Template 2"
    assert client.put(f"/tvs/{tv['id']}", json={"nome": "  "}).status_code == 400


def test_delete_tv(client, make_tv):
    tv = make_tv()
    assert client.delete(f"/tvs/{tv['id']}").json() == {"ok": True}
    assert client.get(f"/tvs/{tv['id']}").status_code == 404


def test_rotation_preview_for_news_layout(client, make_tv):
    tv = make_tv(template="Template 2")
    payload = client.get(f"/tvs/{tv['id']}/rotacao").json()
    assert payload["supports_news"] is True
    assert [slot["label"] for slot in payload["sequencia"]] == [
        "Notice-1",
        "Ad-1",
        "Ad-2",
        "Ad-3",
        "Ad-4",
        "Ad-5",
        "News-1",
        "News-2",
        "News-3",
    ]
    assert payload["descricao"] == "1 aviso(s) : 5 anúncio(s) : 3 notícia(s)"
    assert payload["truncated"] is False


def test_update_rotation_clamps_and_keeps_missing_fields(client, make_tv):
    tv = make_tv()
    response = client.put(
        f"/tvs/{tv['id']}/rotacao",
        json={"proporcao_avisos": -3, "proporcao_anuncios": 2},
    )
    assert response.status_code == 200
    payload = response.json()
    assert (payload["proporcao_avisos"], payload["proporcao_anuncios"], payload["proporcao_noticias"]) == (0, 2, 3)
    assert [slot["label"] for slot in payload["sequencia"]] == ["Ad-1", "Ad-2"]

    stored = client.get(f"/tvs/{tv['id']}").json()
    assert stored["proporcao_avisos"] == 0
    assert stored["proporcao_anuncios"] == 2


def test_update_rotation_called_directly(db, make_tv):
    tv = make_tv(template="layout2")
    payload = tv_router.update_rotation(
        tv["id"],
        RotationIn(proporcao_avisos=3, proporcao_anuncios=5, proporcao_noticias=5),
        db=db,
    )
    assert len(payload["sequencia"]) == 12
    assert payload["truncated"] is True
    assert db.get(TV, tv["id"]).proporcao_noticias == 5


def test_rotation_preview_length_is_capped(client, make_tv):
    tv = make_tv(template="Template 2", proporcao_anuncios=500)
    payload = client.get(f"/tvs/{tv['id']}/rotacao", params={"max_items": 10000}).json()
    assert len(payload["sequencia"]) == 12
    assert payload["truncated"] is True


def test_heartbeat_marks_tv_online(client, make_tv):
    tv = make_tv(codigo_conexao="HALL-01")
    response = client.post("/tvs/heartbeat", params={"codigo_conexao": "HALL-01"})
    assert response.status_code == 200
    assert response.json()["status"] == "online"
    assert client.get(f"/tvs/{tv['id']}").json()["status"] == "online"
    assert client.post("/tvs/heartbeat", params={"codigo_conexao": "nope"}).status_code == 404


def test_stale_heartbeat_goes_offline(db, make_tv):
    tv = make_tv()
    row = db.get(TV, tv["id"])
    row.last_seen = datetime.utcnow() - timedelta(seconds=tv_router.TV_OFFLINE_AFTER_SEC + 5)
    row.status = "online"
    db.commit()

    changes = sweep_tv_status()
    assert changes == [
        {"tv_id": str(tv["id"]), "status": "offline", "last_seen": row.last_seen.isoformat()}
    ]
    assert sweep_tv_status() == []


def test_derive_tv_status():
    now = datetime(2024, 1, 1, 12, 0, 0)
    assert tv_router.derive_tv_status(None, now) == "offline"
    assert tv_router.derive_tv_status(now - timedelta(seconds=10), now) == "online"
    assert tv_router.derive_tv_status(now - timedelta(hours=1), now) == "offline"


def test_content_feed_only_lists_eligible_items(client, db, make_tv, condominio, sindico):
    tv = make_tv(template="Template 2")
    own = client.post(
        "/anuncios",
        json={
            "nome": "Padaria",
            "nome_anunciante": "Padaria LTDA",
            "data_expiracao": days_from_today(10),
            "condominios_ids": [condominio["id"]],
        },
    ).json()
    client.post(
        "/anuncios",
        json={
            "nome": "Outro prédio",
            "nome_anunciante": "Loja",
            "data_expiracao": days_from_today(10),
            "condominios_ids": [condominio["id"] + 100],
        },
    )
    db.add(
        Anuncio(
            nome="Vencido",
            nome_anunciante="Antigo",
            data_expiracao=date.today() - timedelta(days=1),
            condominios_ids=str(condominio["id"]),
            status="ativo",
        )
    )
    db.commit()
    aviso = client.post(
        "/avisos",
        json={"nome": "Reunião", "mensagem": "Assembleia", "condominio_id": condominio["id"], "sindico_id": sindico["id"]},
    ).json()

    feed = client.get(f"/tvs/{tv['id']}/conteudo").json()
    assert [item["id"] for item in feed["anuncios"]] == [own["id"]]
    assert [item["id"] for item in feed["avisos"]] == [aviso["id"]]
    assert feed["rotacao"]["supports_news"] is True
    assert feed["condominio_id"] == condominio["id"]
