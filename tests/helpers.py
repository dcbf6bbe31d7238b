from datetime import date, timedelta


def days_from_today(days: int) -> str:
    return (date.today() + timedelta(days=days)).isoformat()
