"""Rich renderables for a normalized WeatherModel."""

from __future__ import annotations

from typing import Any

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .weather.codes import SkyTheme, describe_code, icon_for_code
from .weather.formatting import comfort_message, format_day, format_time
from .weather.models import GeoLocation, WeatherModel

SKY_STYLES: dict[SkyTheme, str] = {
    "clear": "bright_yellow",
    "clouds": "grey70",
    "rain": "steel_blue1",
    "snow": "bright_white",
    "storm": "magenta",
}


def _or_dash(value: Any, suffix: str = "", dash: str = "--") -> str:
    return f"{value}{suffix}" if value is not None else f"{dash}{suffix}"


def current_panel(weather: WeatherModel) -> Panel:
    location = weather.location
    current = weather.current
    title = location.name if not location.country else f"{location.name}, {location.country}"

    summary = Text()
    summary.append(_or_dash(current.temperature, "°C"), style="bold")
    summary.append(f"  {describe_code(current.code)}\n")
    summary.append(f"Feels like {_or_dash(current.feels_like, '°C')}\n")
    summary.append(f"{location.region or ''} · {location.coordinates}\n", style="dim")
    summary.append(comfort_message(current.temperature, current.feels_like))

    stats = Table.grid(padding=(0, 2))
    stats.add_column(style="dim")
    stats.add_column()
    stats.add_row("Humidity", _or_dash(current.humidity, "%"))
    stats.add_row("Wind", _or_dash(current.wind, " km/h"))
    stats.add_row("Precip", _or_dash(current.precipitation, " mm"))
    stats.add_row("UV index", _or_dash(current.uv))

    return Panel(
        Group(summary, Text(""), stats),
        title=f"{title} · Now",
        border_style=SKY_STYLES[weather.sky_theme],
    )


def hourly_table(weather: WeatherModel, max_rows: int | None = None) -> Table:
    table = Table(title="Next hours")
    table.add_column("Time")
    table.add_column("Temp")
    table.add_column("Rain")
    table.add_column("UV")
    table.add_column("Wind")
    hours = weather.hourly if max_rows is None else weather.hourly[:max_rows]
    for hour in hours:
        table.add_row(
            format_time(hour.time, weather.timezone),
            _or_dash(hour.temperature, "°C"),
            f"{hour.precip if hour.precip is not None else 0}%",
            _or_dash(hour.uv, dash="-"),
            _or_dash(hour.wind, " km/h", dash="-"),
        )
    return table


def sun_panel(weather: WeatherModel) -> Panel | None:
    """Sunrise/sunset and peak UV for the first forecast day."""
    if not weather.daily:
        return None
    today = weather.daily[0]
    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="dim")
    grid.add_column()
    grid.add_row("Sunrise", format_time(today.sunrise, weather.timezone))
    grid.add_row("Sunset", format_time(today.sunset, weather.timezone))
    grid.add_row("Peak UV", _or_dash(today.uv))
    grid.add_row("Max temp", _or_dash(today.temperature_max, "°C"))
    grid.add_row("Rain chance", f"{today.precip if today.precip is not None else 0}%")
    return Panel(grid, title="Sun + UV window")


def daily_table(weather: WeatherModel) -> Table:
    table = Table(title="5-day outlook")
    table.add_column("Day")
    table.add_column("")
    table.add_column("High / Low")
    table.add_column("Rain")
    for day in weather.daily:
        table.add_row(
            format_day(day.date, weather.timezone),
            icon_for_code(day.code),
            f"{_or_dash(day.temperature_max, '°')} / {_or_dash(day.temperature_min, '°')}",
            f"{day.precip if day.precip is not None else 0}%",
        )
    return table


def rain_footer(weather: WeatherModel) -> str | None:
    if weather.next_rain_hour is None:
        return None
    return (
        "Next notable rain chance: "
        f"{format_time(weather.next_rain_hour.time, weather.timezone)} "
        f"with {weather.next_rain_hour.precip}% probability. "
        f"Last updated {format_time(weather.last_updated, weather.timezone)}."
    )


def print_weather(console: Console, weather: WeatherModel, max_hours: int | None = None) -> None:
    """Print every card for `weather`, skipping empty sections."""
    console.print(current_panel(weather))
    if weather.hourly:
        console.print(hourly_table(weather, max_rows=max_hours))
    sun = sun_panel(weather)
    if sun is not None:
        console.print(sun)
    if weather.daily:
        console.print(daily_table(weather))
    footer = rain_footer(weather)
    if footer:
        console.print(footer)


def print_suggestions(console: Console, query: str, suggestions: list[GeoLocation]) -> None:
    if not suggestions:
        console.print(f"No places match {query!r}.")
        return
    table = Table(title=f"Places matching {query!r}")
    table.add_column("Place", overflow="fold")
    table.add_column("Region", overflow="fold")
    table.add_column("Coordinates")
    table.add_column("Timezone")
    for item in suggestions:
        table.add_row(
            item.label,
            item.region or "-",
            f"{item.latitude:.2f}, {item.longitude:.2f}",
            item.timezone or "-",
        )
    console.print(table)
