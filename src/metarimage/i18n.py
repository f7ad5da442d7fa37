"""Localized message tables.

Every user-visible literal of the report and the command lives here so the
decoder and formatter never hard-code a language.
"""

from __future__ import annotations

from typing import Final, Literal

from pydantic import BaseModel, ConfigDict

LocaleName = Literal["zh-CN", "en-US"]


class Messages(BaseModel):
    """Message table for one locale. Defaults are the zh-CN strings."""

    model_config = ConfigDict(frozen=True)

    # command
    command_description: str = "查询指定 ICAO 机场的 METAR/SPECI 天气报告"
    command_usage: str = "使用方法：metar <ICAO代码>"
    invalid_icao: str = "请提供一个有效的 ICAO 代码。"
    fetch_failed: str = "获取或生成 METAR 信息失败，请稍后再试。"
    upstream_failed: str = "无法获取 METAR 数据"
    image_saved: str = "METAR 图片已保存至 {path}"

    # decoder fallbacks
    unknown: str = "未知"
    not_available: str = "N/A"
    clear_sky: str = "晴天"
    unknown_weather: str = "未知天气现象"
    weather_separator: str = ", "
    no_cloud_layer: str = "无特别云层（NSC）"
    cloud_layer: str = "{coverage} 云层高度 {height} 00英尺"
    cloud_separator: str = "，"
    no_remark: str = "无 RMK 信息"
    calm_wind: str = "地面静风"
    no_significant_change: str = "无显著变化"
    metar_time: str = "UTC {shifted} / CST  {utc}"
    unit_meter: str = "米"
    unit_mile: str = "英里"

    # document
    html_lang: str = "zh-CN"
    title: str = "METAR 报告"
    header: str = "METAR 信息 - {icao}"
    generated_at: str = "本页面生成于 {timestamp}，数据源于 XFlysim Network"
    generated_at_format: str = "{0:%Y}年{0:%m}月{0:%d}日{0:%H}时{0:%M}分{0:%S}秒"
    label_time: str = "时间"
    label_wind_dir: str = "风向"
    label_wind_speed: str = "风速"
    label_visibility: str = "能见度"
    label_weather: str = "天气现象"
    label_temperature: str = "温度"
    label_dewpoint: str = "露点"
    label_pressure: str = "气压"
    label_clouds: str = "云层状况"
    label_forecast: str = "预报"
    label_remark: str = "Remark"
    label_raw: str = "原始METAR"
    label_separator: str = "："


ZH_CN: Final = Messages()

EN_US: Final = Messages(
    command_description="Show the METAR/SPECI weather report of an ICAO airport",
    command_usage="Usage: metar <ICAO code>",
    invalid_icao="Please provide a valid ICAO code.",
    fetch_failed="Failed to fetch or render the METAR report, please try again later.",
    upstream_failed="Unable to fetch METAR data",
    image_saved="METAR image saved to {path}",
    unknown="Unknown",
    clear_sky="Clear sky",
    unknown_weather="Unknown weather phenomenon",
    no_cloud_layer="No significant cloud (NSC)",
    cloud_layer="{coverage} cloud base {height}00 ft",
    cloud_separator=", ",
    no_remark="No RMK information",
    calm_wind="Calm",
    no_significant_change="No significant change",
    unit_meter="m",
    unit_mile="mi",
    html_lang="en",
    title="METAR report",
    header="METAR - {icao}",
    generated_at="Generated at {timestamp}, data from XFlysim Network",
    generated_at_format="{0:%Y-%m-%d %H:%M:%S}",
    label_time="Time",
    label_wind_dir="Wind direction",
    label_wind_speed="Wind speed",
    label_visibility="Visibility",
    label_weather="Weather",
    label_temperature="Temperature",
    label_dewpoint="Dew point",
    label_pressure="Pressure",
    label_clouds="Clouds",
    label_forecast="Forecast",
    label_remark="Remark",
    label_raw="Raw METAR",
    label_separator=": ",
)

MESSAGES: Final[dict[str, Messages]] = {"zh-CN": ZH_CN, "en-US": EN_US}


def get_messages(locale: str) -> Messages:
    """Return the message table for ``locale``.

    Raises:
        KeyError: If the locale has no table
    """
    return MESSAGES[locale]
