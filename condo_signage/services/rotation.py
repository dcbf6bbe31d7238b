import os
from dataclasses import dataclass
from enum import Enum

DEFAULT_NOTICE_QUOTA = 1
DEFAULT_AD_QUOTA = 5
DEFAULT_NEWS_QUOTA = 3
DEFAULT_PREVIEW_MAX_ITEMS = int(os.getenv("SIGNAGE_PREVIEW_MAX_ITEMS", "12"))


class SlotKind(str, Enum):
    NOTICE = "aviso"
    AD = "anuncio"
    NEWS = "noticia"


_LABEL_PREFIX = {
    SlotKind.NOTICE: "Notice",
    SlotKind.AD: "Ad",
    SlotKind.NEWS: "News",
}


@dataclass(frozen=True)
class RotationConfig:
    notice_quota: int = DEFAULT_NOTICE_QUOTA
    ad_quota: int = DEFAULT_AD_QUOTA
    news_quota: int = DEFAULT_NEWS_QUOTA

    def clamped(self) -> "RotationConfig":
        return RotationConfig(
            notice_quota=max(0, int(self.notice_quota or 0)),
            ad_quota=max(0, int(self.ad_quota or 0)),
            news_quota=max(0, int(self.news_quota or 0)),
        )

    @classmethod
    def from_tv(cls, tv) -> "RotationConfig":
        return cls(
            notice_quota=tv.proporcao_avisos if tv.proporcao_avisos is not None else DEFAULT_NOTICE_QUOTA,
            ad_quota=tv.proporcao_anuncios if tv.proporcao_anuncios is not None else DEFAULT_AD_QUOTA,
            news_quota=tv.proporcao_noticias if tv.proporcao_noticias is not None else DEFAULT_NEWS_QUOTA,
        ).clamped()


@dataclass(frozen=True)
class PlaybackSlot:
    kind: SlotKind
    ordinal: int

    @property
    def label(self) -> str:
        return f"{_LABEL_PREFIX[self.kind]}-{self.ordinal}"


ROTATION_PRESETS: dict[str, RotationConfig] = {
    "Padrão": RotationConfig(1, 5, 3),
    "Comercial": RotationConfig(1, 10, 2),
    "Equilibrado": RotationConfig(3, 5, 5),
    "Só Avisos": RotationConfig(1, 0, 0),
}


def layout_supports_news(template: str | None) -> bool:
    # Only the second layout variant reserves a news strip.
    return "2" in (template or "").lower()


def clamp_preview_length(value: int | None) -> int:
    # Callers may shorten the preview, never extend it past the configured cap.
    if value is None:
        return DEFAULT_PREVIEW_MAX_ITEMS
    return max(0, min(value, DEFAULT_PREVIEW_MAX_ITEMS))


def plan_rotation(
    config: RotationConfig,
    layout_supports_news: bool,
    max_preview_length: int = DEFAULT_PREVIEW_MAX_ITEMS,
) -> list[PlaybackSlot]:
    """
    Build the playback preview for one rotation cycle.

    Notices are emitted as a block, then ads, then news (only on layouts
    with a news strip). The length cap is checked before every emission.
    Quotas are assumed non-negative; negative values behave like zero.
    """
    notices = config.notice_quota
    ads = config.ad_quota
    sequence: list[PlaybackSlot] = []
    notice_index = 0
    ad_index = 0

    while (notice_index < notices or ad_index < ads) and len(sequence) < max_preview_length:
        for _ in range(notices):
            if notice_index >= notices or len(sequence) >= max_preview_length:
                break
            notice_index += 1
            sequence.append(PlaybackSlot(SlotKind.NOTICE, notice_index))
        for _ in range(ads):
            if ad_index >= ads or len(sequence) >= max_preview_length:
                break
            ad_index += 1
            sequence.append(PlaybackSlot(SlotKind.AD, ad_index))

    if layout_supports_news and config.news_quota > 0:
        remaining = max(0, max_preview_length - len(sequence))
        for ordinal in range(1, min(config.news_quota, remaining) + 1):
            sequence.append(PlaybackSlot(SlotKind.NEWS, ordinal))

    return sequence


def describe_rotation(config: RotationConfig, supports_news: bool) -> str:
    parts: list[str] = []
    if config.notice_quota > 0:
        parts.append(f"{config.notice_quota} aviso(s)")
    if config.ad_quota > 0:
        parts.append(f"{config.ad_quota} anúncio(s)")
    if supports_news and config.news_quota > 0:
        parts.append(f"{config.news_quota} notícia(s)")
    return " : ".join(parts) or "Nenhum conteúdo configurado"


def rotation_payload(
    config: RotationConfig,
    template: str | None,
    max_preview_length: int = DEFAULT_PREVIEW_MAX_ITEMS,
) -> dict:
    supports_news = layout_supports_news(template)
    sequence = plan_rotation(config, supports_news, max_preview_length)
    return {
        "proporcao_avisos": config.notice_quota,
        "proporcao_anuncios": config.ad_quota,
        "proporcao_noticias": config.news_quota,
        "template": template,
        "supports_news": supports_news,
        "descricao": describe_rotation(config, supports_news),
        "sequencia": [
            {"kind": slot.kind.value, "ordinal": slot.ordinal, "label": slot.label}
            for slot in sequence
        ],
        "truncated": max_preview_length > 0 and len(sequence) >= max_preview_length,
    }
