"""URL routes for the scrum app."""

from django.urls import path

from . import views

app_name = "scrum"

urlpatterns = [
    path("health/", views.health_check, name="health_check"),
    path("sprints/<slug:slug>/report/", views.sprint_report_view, name="sprint_report"),
    path("sprints/<slug:slug>/activities/", views.sprint_activities_view, name="sprint_activities"),
]
