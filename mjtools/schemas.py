from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, conint

from mjtools.tiles import Tile, TileKind, Wind


class MeldType(str, Enum):
    chi = "chi"
    pon = "pon"
    kan = "kan"
    ankan = "ankan"
    kakan = "kakan"


class ShantenVariant(str, Enum):
    normal = "normal"
    chiitoitsu = "chiitoitsu"
    kokushi = "kokushi"


class Yaku(str, Enum):
    RIICHI = "立直"
    DOUBLE_RIICHI = "ダブル立直"
    IPPATSU = "一発"
    MENZEN_TSUMO = "門前清自摸和"
    TANYAO = "断么九"
    PINFU = "平和"
    IIPEIKOU = "一盃口"
    BAKAZE = "場風"
    JIKAZE = "自風"
    HAKU = "役牌 白"
    HATSU = "役牌 發"
    CHUN = "役牌 中"
    RINSHAN = "嶺上開花"
    CHANKAN = "槍槓"
    HAITEI = "海底摸月"
    HOUTEI = "河底撈魚"
    SANSHOKU_DOUJUN = "三色同順"
    ITTSU = "一気通貫"
    CHANTA = "混全帯么九"
    CHIITOITSU = "七対子"
    TOITOI = "対々和"
    SANANKOU = "三暗刻"
    HONROUTOU = "混老頭"
    SANSHOKU_DOUKOU = "三色同刻"
    SANKANTSU = "三槓子"
    SHOUSANGEN = "小三元"
    HONITSU = "混一色"
    JUNCHAN = "純全帯么九"
    RYANPEIKOU = "二盃口"
    CHINITSU = "清一色"
    TENHOU = "天和"
    CHIIHOU = "地和"
    KOKUSHI = "国士無双"
    KOKUSHI_13 = "国士無双十三面待ち"
    CHUUREN = "九蓮宝燈"
    CHUUREN_9 = "純正九蓮宝燈"
    SUUANKOU = "四暗刻"
    SUUANKOU_TANKI = "四暗刻単騎"
    DAISUUSHII = "大四喜"
    SHOUSUUSHII = "小四喜"
    DAISANGEN = "大三元"
    TSUUIISOU = "字一色"
    CHINROUTOU = "清老頭"
    RYUUIISOU = "緑一色"
    SUUKANTSU = "四槓子"
    DORA = "ドラ"
    AKA_DORA = "赤ドラ"
    URA_DORA = "裏ドラ"
    NAGASHI_MANGAN = "流し満貫"


class Meld(BaseModel):
    type: MeldType
    tiles: list[Tile]

    @property
    def open(self) -> bool:
        return self.type != MeldType.ankan

    @property
    def is_kan(self) -> bool:
        return self.type in {MeldType.kan, MeldType.ankan, MeldType.kakan}

    @property
    def base_kind(self) -> TileKind:
        return min(t.kind for t in self.tiles)


class Hand(BaseModel):
    tiles: list[Tile]
    melds: list[Meld] = Field(default_factory=list)

    @property
    def is_menzen(self) -> bool:
        return not any(m.open for m in self.melds)

    @property
    def num_kan(self) -> int:
        return sum(1 for m in self.melds if m.is_kan)

    def all_tiles(self) -> list[Tile]:
        tiles = list(self.tiles)
        for meld in self.melds:
            tiles.extend(meld.tiles)
        return tiles


class AgariContext(BaseModel):
    win_tile: Tile
    hand: Hand
    seat_wind: Wind
    round_wind: Wind
    tsumo: bool = False
    riichi: bool = False
    double_riichi: bool = False
    ippatsu: bool = False
    haitei: bool = False
    rinshan: bool = False
    chankan: bool = False
    nagashi_mangan: bool = False
    tenhou: bool = False
    chiihou: bool = False
    dora_indicators: list[Tile] = Field(default_factory=list)
    ura_dora_indicators: list[Tile] = Field(default_factory=list)
    honba: conint(ge=0) = 0
    riichi_sticks: conint(ge=0) = 0

    @property
    def is_dealer(self) -> bool:
        return self.seat_wind == Wind.E


class RuleConfig(BaseModel):
    kuitan: bool = True
    kokushi13_as_double: bool = True
    suuankou_tanki_as_double: bool = True
    ba1500: bool = False
    mangan_roundup: bool = False
    nagashi_mangan: bool = True

    model_config = ConfigDict(frozen=True)


class YakuItem(BaseModel):
    name: Yaku
    han: int


class FuBreakdownItem(BaseModel):
    name: str
    fu: int


class DoraBreakdown(BaseModel):
    dora: int = 0
    aka_dora: int = 0
    ura_dora: int = 0


class Points(BaseModel):
    ron: int = 0
    tsumo_dealer_pay: int = 0
    tsumo_non_dealer_pay: int = 0


class Payments(BaseModel):
    hand_points_received: int
    honba_bonus: int = 0
    kyotaku_bonus: int = 0
    total_received: int


class ScoreResult(BaseModel):
    han: int
    fu: int
    fu_breakdown: list[FuBreakdownItem] = Field(default_factory=list)
    yaku: list[YakuItem] = Field(default_factory=list)
    yakuman: int = 0
    dora: DoraBreakdown = Field(default_factory=DoraBreakdown)
    point_label: str
    points: Points
    payments: Payments

    @property
    def yaku_names(self) -> set[Yaku]:
        return {item.name for item in self.yaku}


# HTTP payloads; tiles are given in text notation


class MeldInput(BaseModel):
    type: MeldType
    tiles: str


class HandInput(BaseModel):
    closed_tiles: str
    melds: list[MeldInput] = Field(default_factory=list)
    win_tile: str


class ContextInput(BaseModel):
    seat_wind: Wind
    round_wind: Wind
    tsumo: bool = False
    riichi: bool = False
    double_riichi: bool = False
    ippatsu: bool = False
    haitei: bool = False
    rinshan: bool = False
    chankan: bool = False
    nagashi_mangan: bool = False
    tenhou: bool = False
    chiihou: bool = False
    dora_indicators: str = ""
    ura_dora_indicators: str = ""
    honba: conint(ge=0) = 0
    riichi_sticks: conint(ge=0) = 0


class ScoreRequest(BaseModel):
    hand: HandInput
    context: ContextInput
    rules: RuleConfig | None = None


class ScoreResponse(BaseModel):
    status: str = "ok"
    result: ScoreResult


class ShantenRequest(BaseModel):
    hand: str
    variant: ShantenVariant | None = None


class ShantenResponse(BaseModel):
    shanten: int
    normal: int
    chiitoitsu: int
    kokushi: int
    effective_tiles: list[str] = Field(default_factory=list)
