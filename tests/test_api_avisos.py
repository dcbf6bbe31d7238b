from datetime import date, timedelta

from condo_signage.models.aviso import Aviso

from helpers import days_from_today


def test_aviso_without_expiration_is_active(client, condominio, sindico):
    response = client.post(
        "/avisos",
        json={
            "nome": "Coleta seletiva",
            "mensagem": "Separe o lixo reciclável.",
            "condominio_id": condominio["id"],
            "sindico_id": sindico["id"],
            "status": "expirado",
        },
    )
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ativo"
    assert body["data_expiracao"] is None
    assert body["condominios_ids"] == [condominio["id"]]
    assert body["sindico_ids"] == [sindico["id"]]


def test_unreadable_expiration_means_no_expiration(client):
    body = client.post("/avisos", json={"nome": "Aviso", "data_expiracao": "em breve"}).json()
    assert body["status"] == "ativo"
    assert body["data_expiracao"] is None


def test_past_expiration_is_rejected(client):
    response = client.post("/avisos", json={"nome": "Aviso", "data_expiracao": days_from_today(-1)})
    assert response.status_code == 400


def test_unknown_condominio_is_404(client):
    assert client.post("/avisos", json={"nome": "Aviso", "condominio_id": 999}).status_code == 404


def test_sindico_notice_limit(client, sindico, db):
    for index in range(2):
        response = client.post("/avisos", json={"nome": f"Aviso {index}", "sindico_id": sindico["id"]})
        assert response.status_code == 200
    blocked = client.post("/avisos", json={"nome": "Aviso 3", "sindico_id": sindico["id"]})
    assert blocked.status_code == 400

    # Expired notices no longer count against the limit.
    first = db.query(Aviso).order_by(Aviso.id.asc()).first()
    first.data_expiracao = date.today() - timedelta(days=1)
    db.commit()
    assert client.post("/avisos", json={"nome": "Aviso 3", "sindico_id": sindico["id"]}).status_code == 200


def test_list_by_sindico_and_condominio(client, condominio, sindico):
    client.post("/avisos", json={"nome": "Do síndico", "sindico_id": sindico["id"]})
    client.post("/avisos", json={"nome": "Multi", "sindico_ids": "[900]", "condominios_ids": f"{condominio['id']},5"})
    client.post("/avisos", json={"nome": "Solto"})

    by_sindico = client.get(f"/avisos/sindico/{sindico['id']}").json()
    assert [item["nome"] for item in by_sindico] == ["Do síndico"]
    assert [item["nome"] for item in client.get("/avisos/sindico/900").json()] == ["Multi"]
    by_condominio = client.get("/avisos", params={"condominio_id": condominio["id"]}).json()
    assert [item["nome"] for item in by_condominio] == ["Multi"]
    assert len(client.get("/avisos").json()) == 3


def test_update_aviso_recomputes_status(client, db):
    created = client.post("/avisos", json={"nome": "Obra", "data_expiracao": days_from_today(3)}).json()
    row = db.get(Aviso, created["id"])
    row.status = "inativo"
    db.commit()

    response = client.put(f"/avisos/{created['id']}", json={"mensagem": "Obra no hall"})
    assert response.status_code == 200
    assert response.json()["status"] == "ativo"

    cleared = client.put(f"/avisos/{created['id']}", json={"data_expiracao": ""}).json()
    assert cleared["data_expiracao"] is None
    assert cleared["status"] == "ativo"


def test_get_and_delete_aviso(client):
    created = client.post("/avisos", json={"nome": "Gás"}).json()
    assert client.get(f"/avisos/{created['id']}").json()["nome"] == "Gás"
    assert client.delete(f"/avisos/{created['id']}").json() == {"ok": True}
    assert client.get(f"/avisos/{created['id']}").status_code == 404
