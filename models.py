"""ジオコーディング・用途地域判定の結果型"""

from dataclasses import dataclass, field
from typing import Literal, NamedTuple

GeocodeSource = Literal["google", "nominatim"]
FailureReason = Literal["invalid", "not_found", "upstream_error"]
ZoningStatus = Literal["allowed", "conditional", "restricted"]


class TileCoordinate(NamedTuple):
    x: int
    y: int
    z: int


@dataclass(frozen=True)
class Position:
    """ジオコーディング成功結果。"""

    lat: float
    lon: float
    display_name: str
    prefecture: str
    city: str
    location_type: str
    source: GeocodeSource
    retry_count: int = 0
    normalized_address: str | None = None
    attempted_addresses: tuple[str, ...] = field(default_factory=tuple)

    ok = True

    def to_dict(self) -> dict:
        return {
            "lat": self.lat,
            "lon": self.lon,
            "displayName": self.display_name,
            "prefecture": self.prefecture,
            "city": self.city,
            "locationType": self.location_type,
            "source": self.source,
            "retryCount": self.retry_count,
            "normalizedAddress": self.normalized_address,
            "attemptedAddresses": list(self.attempted_addresses),
        }


@dataclass(frozen=True)
class GeocodeFailure:
    """ジオコーディング失敗結果（例外ではなく値として返す）。"""

    reason: FailureReason
    message: str
    status: int | None = None
    retry_count: int = 0
    attempted_addresses: tuple[str, ...] = field(default_factory=tuple)

    ok = False

    def to_dict(self) -> dict:
        return {
            "reason": self.reason,
            "message": self.message,
            "status": self.status,
            "retryCount": self.retry_count,
            "attemptedAddresses": list(self.attempted_addresses),
        }


@dataclass(frozen=True)
class ZoningCategory:
    """用途地域と民泊・旅館業の可否。"""

    code: str
    name: str
    description: str
    minpaku_status: ZoningStatus
    ryokan_status: ZoningStatus
    minpaku_detail: str
    color: str
    main_use: str

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "name": self.name,
            "description": self.description,
            "minpakuStatus": self.minpaku_status,
            "ryokanStatus": self.ryokan_status,
            "minpakuDetail": self.minpaku_detail,
            "color": self.color,
            "mainUse": self.main_use,
        }


@dataclass(frozen=True)
class ZoningLookupResult:
    detected: bool
    zoning: ZoningCategory | None
    raw_zoning_name: str | None
    floor_area_ratio: str | None
    building_coverage_ratio: str | None
    external_map_url: str
    source: str = "reinfolib"

    def to_dict(self) -> dict:
        return {
            "detected": self.detected,
            "zoning": self.zoning.to_dict() if self.zoning else None,
            "rawZoningName": self.raw_zoning_name,
            "source": self.source,
            "externalMapUrl": self.external_map_url,
            "floorAreaRatio": self.floor_area_ratio,
            "buildingCoverageRatio": self.building_coverage_ratio,
        }
