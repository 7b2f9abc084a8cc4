from __future__ import annotations

from ...common import ids
from ...core.enums import ExceptionType
from ..geofence import distance_to_site
from ..model import ExceptionRecord
from .base import ShiftContext, ShiftRule


class OutsideFenceRule(ShiftRule):
    """Punches of the day recorded outside the assigned site's radius.

    One exception per offending event; silent when the assignment has no
    location, the site is unknown or the event carries no geolocation.
    """

    exception_type = ExceptionType.OUTSIDE_FENCE
    code = ids.OUTSIDE_FENCE

    def evaluate(self, ctx: ShiftContext) -> list[ExceptionRecord]:
        site = ctx.site
        if site is None:
            return []

        out: list[ExceptionRecord] = []
        for event in ctx.day.events:
            if event.location is None:
                continue
            distance = distance_to_site(event.location, site)
            if distance <= site.radius_meters:
                continue
            details = (
                f"{event.event_type.value} recorded {distance:.0f}m from {site.name} "
                f"(radius {site.radius_meters:.0f}m)."
            )
            out.append(self.flag(ctx, details, source=event, key=event.event_id))
        return out
