from typing import Final

# Upstream weather API
DEFAULT_API_URL: Final = "https://api.xflysim.com/pilot/api/realTimeMap/weather/{icao}"
API_SUCCESS_CODE: Final = 20000

# Fixed offset of the second clock shown next to the METAR observation time
METAR_LOCAL_OFFSET_HOURS: Final = 8

# Selector of the card the auto capture mode crops to
CAPTURE_SELECTOR: Final = ".container"
# Page background behind the card, see templates/report.html.j2
PAGE_BACKGROUND: Final = (0xF4, 0xF4, 0xF4)
# Largest difference from the background still treated as background; drops
# the faint outer ring of the card box-shadow
CAPTURE_TOLERANCE: Final = 8

DEFAULT_WEATHER_MAP: Final[list[tuple[str, str]]] = [
    ("BR", "雾"),
    ("FG", "雾或薄雾"),
    ("HZ", "霾"),
    ("FU", "烟雾"),
    ("VA", "火山灰"),
    ("DU", "沙尘"),
    ("SA", "沙"),
    ("SS", "尘暴"),
    ("DS", "风沙"),
    ("SG", "雪粒"),
    ("IC", "冰晶"),
    ("PL", "霰"),
    ("GR", "冰雹"),
    ("GS", "小冰雹"),
    ("UP", "未知降水"),
    ("RA", "雨"),
    ("DZ", "毛毛雨"),
    ("SN", "雪"),
    ("SQ", "飑线"),
    ("FC", "风暴"),
    ("TS", "雷暴"),
    ("MI", "微型沙尘暴"),
    ("PR", "部分地区"),
    ("BC", "局部"),
    ("DR", "吹动的尘土或雪花"),
    ("BL", "风暴"),
    ("SH", "阵性降水"),
    ("+", "大"),
    ("-", "小"),
]

DEFAULT_CLOUD_COVERAGE_MAP: Final[list[tuple[str, str]]] = [
    ("FEW", "少云"),
    ("SCT", "疏云"),
    ("BKN", "多云"),
    ("OVC", "满天云"),
    ("NSC", "无显著云层"),
    ("SKC", "晴空"),
    ("CLR", "晴朗"),
]
