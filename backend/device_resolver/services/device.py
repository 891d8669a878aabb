"""Clasificación del dispositivo de origen a partir de los headers del request.

Determina si el cliente es un equipo normal (escritorio), un móvil o una
tableta, y asigna una plataforma aproximada. Las reglas se evalúan en orden
fijo y la primera que coincide gana; todas las comparaciones son por
contención de subcadenas sobre el user-agent en minúsculas.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from device_resolver.core.logging import get_logger

logger = get_logger(__name__)

ANDROID = "android"
MOBILE = "mobile"
IPAD = "ipad"
IPHONE = "iphone"
IPOD = "ipod"
SILK = "silk"
WAP = "wap"

USER_AGENT_HEADER = "user-agent"
X_WAP_PROFILE_HEADER = "x-wap-profile"
PROFILE_HEADER = "profile"
ACCEPT_HEADER = "accept"

PREFIX_LENGTH = 4

MOBILE_USER_AGENT_PREFIXES: tuple[str, ...] = (
    "w3c ", "w3c-", "acs-", "alav", "alca", "amoi", "audi", "avan", "benq",
    "bird", "blac", "blaz", "brew", "cell", "cldc", "cmd-", "dang", "doco",
    "eric", "hipt", "htc_", "inno", "ipaq", "ipod", "jigs", "kddi", "keji",
    "leno", "lg-c", "lg-d", "lg-g", "lge-", "lg/u", "maui", "maxo", "midp",
    "mits", "mmef", "mobi", "mot-", "moto", "mwbp", "nec-", "newt", "noki",
    "palm", "pana", "pant", "phil", "play", "port", "prox", "qwap", "sage",
    "sams", "sany", "sch-", "sec-", "send", "seri", "sgh-", "shar", "sie-",
    "siem", "smal", "smar", "sony", "sph-", "symb", "t-mo", "teli", "tim-",
    "tosh", "tsm-", "upg1", "upsi", "vk-v", "voda", "wap-", "wapa", "wapi",
    "wapp", "wapr", "webc", "winw", "xda ", "xda-",
)  # fmt: skip

# "nintendo DS" conserva la mayúscula original, por lo que nunca coincide
# contra un user-agent normalizado.
MOBILE_USER_AGENT_KEYWORDS: tuple[str, ...] = (
    "blackberry", "webos", "ipod", "lge vx", "midp", "maemo", "mmp", "mobile",
    "netfront", "hiptop", "nintendo DS", "novarra", "openweb", "opera mobi",
    "opera mini", "palm", "psp", "phone", "smartphone", "symbian", "up.browser",
    "up.link", "wap", "windows ce",
)  # fmt: skip

TABLET_USER_AGENT_KEYWORDS: tuple[str, ...] = ("ipad", "playbook", "hp-tablet", "kindle")


class Platform(str, Enum):
    """Etiquetas de plataforma asignadas junto con la categoría del dispositivo."""

    ANDROID = "android"
    IOS = "ios"
    IPAD = "ipad"
    KINDLE = "Kindle"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class Device:
    """Resultado inmutable de clasificar un request."""

    is_normal: bool = False
    is_mobile: bool = False
    is_tablet: bool = False
    platform: Platform = Platform.UNKNOWN

    def __post_init__(self) -> None:
        flags = (self.is_normal, self.is_mobile, self.is_tablet)
        if sum(bool(flag) for flag in flags) != 1:
            raise ValueError("A device must be exactly one of normal, mobile or tablet")
        if self.is_normal and self.platform is not Platform.UNKNOWN:
            raise ValueError("A normal device cannot carry a platform")

    @classmethod
    def normal(cls) -> Device:
        return cls(is_normal=True)

    @classmethod
    def mobile(cls, platform: Platform = Platform.UNKNOWN) -> Device:
        return cls(is_mobile=True, platform=platform)

    @classmethod
    def tablet(cls, platform: Platform = Platform.UNKNOWN) -> Device:
        return cls(is_tablet=True, platform=platform)

    @property
    def kind(self) -> str:
        """Categoría en texto: `normal`, `mobile` o `tablet`."""
        if self.is_tablet:
            return "tablet"
        if self.is_mobile:
            return "mobile"
        return "normal"

    def as_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "is_normal": self.is_normal,
            "is_mobile": self.is_mobile,
            "is_tablet": self.is_tablet,
            "platform": self.platform.value,
        }


def _header(headers: Mapping[str, str], name: str) -> str:
    """Lee un header sin distinguir mayúsculas; ausente equivale a cadena vacía."""
    value = headers.get(name)
    if value is None:
        lowered = name.lower()
        for key, candidate in headers.items():
            if key.lower() == lowered:
                value = candidate
                break
    return value or ""


def _contains_any(value: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in value for keyword in keywords)


def _is_apple_handheld(agent: str) -> bool:
    return IPHONE in agent or IPOD in agent or IPAD in agent


def _resolve(headers: Mapping[str, str]) -> tuple[str, Device]:
    agent = _header(headers, USER_AGENT_HEADER).lower()

    if agent:
        if ANDROID in agent and MOBILE not in agent:
            return "tablet.android", Device.tablet(Platform.ANDROID)
        if IPAD in agent:
            return "tablet.ipad", Device.tablet(Platform.IPAD)
        if SILK in agent and MOBILE not in agent:
            return "tablet.silk", Device.tablet(Platform.KINDLE)
        if _contains_any(agent, TABLET_USER_AGENT_KEYWORDS):
            return "tablet.keyword", Device.tablet()

    # Presencia de un perfil UAProf (X-Wap-Profile / Profile).
    x_wap_profile = _header(headers, X_WAP_PROFILE_HEADER)
    profile = _header(headers, PROFILE_HEADER)
    if (x_wap_profile or profile) and agent:
        if ANDROID in agent:
            return "profile.android", Device.mobile(Platform.ANDROID)
        if _is_apple_handheld(agent):
            return "profile.ios", Device.mobile(Platform.IOS)
        return "profile", Device.mobile()

    if len(agent) >= PREFIX_LENGTH:
        prefix = agent[:PREFIX_LENGTH]
        if _contains_any(prefix, MOBILE_USER_AGENT_PREFIXES):
            return "prefix", Device.mobile()

    accept = _header(headers, ACCEPT_HEADER)
    if accept and WAP in accept:
        return "accept.wap", Device.mobile()

    if agent:
        if ANDROID in agent:
            return "mobile.android", Device.mobile(Platform.ANDROID)
        if _is_apple_handheld(agent):
            return "mobile.ios", Device.mobile(Platform.IOS)
        if _contains_any(agent, MOBILE_USER_AGENT_KEYWORDS):
            return "mobile.keyword", Device.mobile()

    return "default", Device.normal()


def classify(headers: Mapping[str, str]) -> Device:
    """Clasifica el dispositivo que originó un request a partir de sus headers.

    Args:
        headers: Colección de headers del request. Se consultan `User-Agent`,
            `X-Wap-Profile`, `Profile` y `Accept` sin distinguir mayúsculas.

    Returns:
        Un `Device` con exactamente una categoría activa. Headers ausentes o
        vacíos producen un dispositivo normal con plataforma `Unknown`.
    """
    rule, device = _resolve(headers)
    logger.debug(
        "device.classified",
        extra={"rule": rule, "kind": device.kind, "platform": device.platform.value},
    )
    return device
