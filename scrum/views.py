"""API views exposing sprint reports."""

import logging

from django.conf import settings
from django.http import JsonResponse
from django.utils.translation import gettext
from rest_framework.decorators import api_view
from rest_framework.response import Response

from scrum.metrics import activities, serialize_activities, sprint_report
from scrum.repository import SprintGraphLoader, SprintNotFound

logger = logging.getLogger("scrum.views")


def health_check(request):
    """Return a simple health-check response."""
    return JsonResponse({"status": "ok"})


@api_view(["GET"])
def sprint_report_view(request, slug):
    """Return every derived metric for one sprint."""
    try:
        graph = SprintGraphLoader().by_slug(slug)
    except SprintNotFound as e:
        logger.warning("Report requested for unknown sprint: %s", e)
        return Response({"error": f"Sprint '{slug}' not found"}, status=404)

    return Response(sprint_report(graph, gettext, activity_limit=settings.SPRINT_ACTIVITY_LIMIT))


@api_view(["GET"])
def sprint_activities_view(request, slug):
    """Return the sprint's most recent status changes, newest first."""
    try:
        graph = SprintGraphLoader().by_slug(slug)
    except SprintNotFound as e:
        logger.warning("Activities requested for unknown sprint: %s", e)
        return Response({"error": f"Sprint '{slug}' not found"}, status=404)

    events = activities(graph, settings.SPRINT_ACTIVITY_LIMIT)
    return Response({"sprint": graph.slug, "activities": serialize_activities(events)})
