"""
Report Compiler.

Turns a WeatherReport into a JSON-ready dict or a plain-text report.
No dice are rolled here.
"""

from typing import Any, Optional

from greyhawk_weather.weather.orchestrator import PrecipitationReport, WeatherReport


def _temperature(value: Optional[int]) -> str:
    return "N/A" if value is None else f"{value}°F"


def _amount(precipitation: PrecipitationReport) -> str:
    if precipitation.amount is not None:
        return f"{precipitation.amount} inches"
    return precipitation.amount_text or "None"


def _duration(precipitation: PrecipitationReport) -> str:
    if precipitation.duration is not None and precipitation.duration_unit is not None:
        return f"{precipitation.duration} {precipitation.duration_unit.value}"
    return precipitation.duration_text or "None"


class ReportCompiler:
    """Formats weather reports."""

    def to_dict(self, report: WeatherReport) -> dict[str, Any]:
        """Structured form of a report, with a stable key order."""
        precipitation = report.precipitation
        wind = report.wind
        return {
            "date": {
                **report.date.to_dict(),
                "weekday": report.weekday,
                "season": report.season.value,
            },
            "location": report.location.to_dict(),
            "temperature": {
                "high": report.high,
                "low": report.low,
                "wind_chill": report.wind_chill,
                "extreme": report.extreme.value,
                "extreme_days_left": report.extreme_days_left,
            },
            "sky": report.sky,
            "humidity": {
                "percent": report.humidity,
                "effects": report.heat_effects,
            },
            "precipitation": {
                "type": precipitation.type,
                "amount": precipitation.amount,
                "amount_text": precipitation.amount_text,
                "duration": precipitation.duration,
                "duration_unit": (
                    precipitation.duration_unit.value if precipitation.duration_unit else None
                ),
                "duration_text": precipitation.duration_text,
                "movement": precipitation.movement,
                "normal_vision": precipitation.normal_vision,
                "infravision": precipitation.infravision,
                "tracking": precipitation.tracking,
                "lost_chance": precipitation.lost_chance,
                "area_effect": precipitation.area_effect,
                "continuing": precipitation.continuing,
                "continues_tomorrow": precipitation.continues_tomorrow,
                "rainbow": precipitation.rainbow,
            },
            "wind": {
                "speed": wind.speed,
                "direction": wind.direction,
                "label": wind.label,
                "effects": dict(wind.effects),
            },
            "moons": {
                "luna": report.moons.luna,
                "celene": report.moons.celene,
                "lycanthrope_activity": report.lycanthrope_activity.value,
            },
            "special_event": {
                "event": report.special_event.value if report.special_event else None,
                "cause": report.special_cause,
            },
            "sunrise": report.sunrise,
            "sunset": report.sunset,
            "notes": list(report.notes),
        }

    def to_text(self, report: WeatherReport) -> str:
        """Human-readable report."""
        precipitation = report.precipitation
        wind = report.wind
        lines = [
            f"Weather for {report.date} ({report.season.value})",
            f"Terrain: {report.location.terrain.value}, latitude {report.location.latitude}, "
            f"elevation {report.location.elevation_feet} ft",
            "",
            f"High: {_temperature(report.high)}   Low: {_temperature(report.low)}   "
            f"Wind chill: {_temperature(report.wind_chill)}",
        ]
        if report.extreme.value != "none":
            lines.append(
                f"{report.extreme.value} ({report.extreme_days_left} more day(s) after today)"
            )
        lines.append(f"Sky: {report.sky}")
        if report.humidity:
            lines.append(f"Humidity: {report.humidity}% - {report.heat_effects}")
        else:
            lines.append(f"Heat and humidity: {report.heat_effects}")

        if precipitation.occurred:
            heading = f"Precipitation: {precipitation.type}"
            if precipitation.continuing:
                heading += " (continuing)"
            lines.extend([
                heading,
                f"  Amount: {_amount(precipitation)}",
                f"  Duration: {_duration(precipitation)}",
                f"  Movement Rate: {precipitation.movement}",
                f"  Range of Normal Vision: {precipitation.normal_vision}",
                f"  Range of IR Vision: {precipitation.infravision}",
                f"  Effect on Tracking: {precipitation.tracking}",
                f"  Chance of Getting Lost: {precipitation.lost_chance}",
            ])
            if precipitation.area_effect:
                lines.append(f"  Area Effect: {precipitation.area_effect}")
            if precipitation.continues_tomorrow:
                lines.append("  Continues tomorrow")
        else:
            lines.append("Precipitation: None")
        if precipitation.rainbow:
            lines.append(f"Rainbow: {precipitation.rainbow}")
        if report.special_cause:
            lines.append(f"Cause: {report.special_cause}")

        lines.append(f"Wind: {wind.speed} mph from the {wind.direction} ({wind.label})")
        for domain, effect in wind.effects.items():
            lines.append(f"  {domain}: {effect}")

        lines.extend([
            f"Luna: {report.moons.luna}   Celene: {report.moons.celene}",
            f"Sunrise: {report.sunrise}   Sunset: {report.sunset}",
        ])
        if report.notes:
            lines.append("")
            lines.append("Notes:")
            lines.extend(f"- {note}" for note in report.notes)
        return "\n".join(lines)
