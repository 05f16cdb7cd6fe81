from typing import List

from app.models.profile import QuoteProfile
from app.services.completeness import evaluate_completeness

DONE = "✅"
IN_PROGRESS = "🔄"
PENDING = "⏳"
NOT_READY = "❌"

NOT_SPECIFIED = "Not specified"


def _vehicle_complete(vehicle) -> bool:
    return bool(vehicle.year and vehicle.make and vehicle.model)


def _status(done: bool, pending: str = IN_PROGRESS) -> str:
    return DONE if done else pending


def format_profile_summary(profile: QuoteProfile) -> str:
    """
    報價資料的可讀摘要（Markdown），供對話層直接顯示給使用者

    區塊：基本資料、各車輛、各駕駛人、保障偏好、完整度。
    profile.completeness 為空時會先重新計算。
    """
    completeness = profile.completeness or evaluate_completeness(profile)
    basics = profile.basics
    lines: List[str] = ["## Your Quote Profile", ""]

    # 基本資料
    basics_complete = bool(basics.vehicle_count and basics.driver_count and basics.zip_code)
    lines += [
        f"### Basic Information {_status(basics_complete)}",
        f"- **Vehicles:** {basics.vehicle_count or NOT_SPECIFIED}",
        f"- **Drivers:** {basics.driver_count or NOT_SPECIFIED}",
        f"- **Location:** {basics.zip_code or basics.state or NOT_SPECIFIED}",
        "",
    ]

    # 車輛
    if profile.vehicles:
        all_done = all(_vehicle_complete(v) for v in profile.vehicles)
        lines.append(f"### Vehicles {_status(all_done)}")
        for index, vehicle in enumerate(profile.vehicles, start=1):
            lines.append(f"**Vehicle {index}** {_status(_vehicle_complete(vehicle), PENDING)}:")
            if vehicle.year or vehicle.make or vehicle.model:
                lines.append(
                    f"- {vehicle.year or '____'} {vehicle.make or '____'} {vehicle.model or '____'}"
                )
            if vehicle.annual_mileage:
                lines.append(f"- {vehicle.annual_mileage:,} miles/year")
            if vehicle.primary_use:
                lines.append(f"- Used for {vehicle.primary_use}")
            lines.append("")

    # 駕駛人
    if profile.drivers:
        all_done = all(d.age for d in profile.drivers)
        lines.append(f"### Drivers {_status(all_done)}")
        for index, driver in enumerate(profile.drivers, start=1):
            lines.append(f"**Driver {index}** {_status(bool(driver.age), PENDING)}:")
            if driver.age:
                detail = f"- Age {driver.age}"
                if driver.years_licensed:
                    detail += f", {driver.years_licensed} years licensed"
                lines.append(detail)
            if driver.marital_status:
                lines.append(f"- {driver.marital_status.capitalize()}")
            if driver.has_violations is not None:
                lines.append(f"- {'Has violations' if driver.has_violations else 'Clean record'}")
            lines.append("")

    # 保障偏好
    coverage = profile.coverage
    if coverage.model_dump(exclude_none=True):
        lines.append("### Coverage Preferences")
        if coverage.current_carrier:
            lines.append(f"- Current carrier: {coverage.current_carrier}")
        if coverage.current_premium:
            lines.append(f"- Current premium: ${coverage.current_premium:,}/month")
        if coverage.desired_coverage:
            lines.append(f"- Coverage level: {coverage.desired_coverage}")
        if coverage.deductible:
            lines.append(f"- Deductible: ${coverage.deductible:,}")
        lines.append("")

    # 完整度
    ready = f"{DONE} Yes" if completeness.ready_for_quote else f"{NOT_READY} No"
    lines += [
        "### Profile Completeness",
        f"- **Score:** {completeness.score}%",
        f"- **Ready for quotes:** {ready}",
    ]
    if completeness.missing_required:
        lines.append(f"- **Missing required:** {len(completeness.missing_required)} items")
    if completeness.missing_optional:
        lines.append(f"- **Missing optional:** {len(completeness.missing_optional)} items")

    return "\n".join(lines) + "\n"
