from condo_signage.api import rotation as rotation_router
from condo_signage.services.rotation import DEFAULT_PREVIEW_MAX_ITEMS


def test_presets_show_news_only_for_news_layout(client):
    plain = {item["nome"]: item["proporcao"] for item in client.get("/rotacao/presets").json()}
    assert plain == {"Padrão": "1:5", "Comercial": "1:10", "Equilibrado": "3:5", "Só Avisos": "1:0:0"}

    news = {item["nome"]: item["proporcao"] for item in client.get("/rotacao/presets", params={"template": "Template 2"}).json()}
    assert news["Padrão"] == "1:5:3"
    assert news["Equilibrado"] == "3:5:5"


def test_preview_clamps_negative_inputs(client):
    payload = client.get(
        "/rotacao/preview",
        params={"avisos": -1, "anuncios": 2, "noticias": 4, "template": "layout2", "max_items": 4},
    ).json()
    assert [slot["label"] for slot in payload["sequencia"]] == ["Ad-1", "Ad-2", "News-1", "News-2"]
    assert payload["proporcao_avisos"] == 0
    assert payload["truncated"] is True


def test_preview_called_directly():
    payload = rotation_router.preview_rotation(avisos=0, anuncios=0, noticias=0, template=None, max_items=12)
    assert payload["sequencia"] == []
    assert payload["descricao"] == "Nenhum conteúdo configurado"


def test_preview_never_grows_past_the_configured_cap(client):
    payload = client.get("/rotacao/preview", params={"avisos": 300000, "max_items": 300000}).json()
    assert len(payload["sequencia"]) == DEFAULT_PREVIEW_MAX_ITEMS
    assert payload["truncated"] is True
