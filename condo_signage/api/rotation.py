from fastapi import APIRouter

from condo_signage.services.rotation import (
    DEFAULT_AD_QUOTA,
    DEFAULT_NEWS_QUOTA,
    DEFAULT_NOTICE_QUOTA,
    DEFAULT_PREVIEW_MAX_ITEMS,
    ROTATION_PRESETS,
    RotationConfig,
    clamp_preview_length,
    layout_supports_news,
    rotation_payload,
)

router = APIRouter(prefix="/rotacao", tags=["rotacao"])


@router.get("/presets")
def list_presets(template: str | None = None):
    supports_news = layout_supports_news(template)
    presets = []
    for name, config in ROTATION_PRESETS.items():
        ratio = f"{config.notice_quota}:{config.ad_quota}"
        if supports_news or config.news_quota == 0:
            ratio = f"{ratio}:{config.news_quota}"
        presets.append(
            {
                "nome": name,
                "proporcao": ratio,
                "proporcao_avisos": config.notice_quota,
                "proporcao_anuncios": config.ad_quota,
                "proporcao_noticias": config.news_quota,
            }
        )
    return presets


@router.get("/preview")
def preview_rotation(
    avisos: int = DEFAULT_NOTICE_QUOTA,
    anuncios: int = DEFAULT_AD_QUOTA,
    noticias: int = DEFAULT_NEWS_QUOTA,
    template: str | None = None,
    max_items: int = DEFAULT_PREVIEW_MAX_ITEMS,
):
    config = RotationConfig(avisos, anuncios, noticias).clamped()
    return rotation_payload(config, template, clamp_preview_length(max_items))
