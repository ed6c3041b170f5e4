from django.contrib import admin

from scrum.models import (
    Branch,
    Comment,
    Commit,
    CommitFile,
    ConfigEffort,
    ConfigIssueType,
    ConfigStatus,
    Issue,
    IssueStatusChange,
    Note,
    ProductBacklog,
    PullRequest,
    Sprint,
)


class IssueInline(admin.TabularInline):
    model = Issue
    fields = ("title", "type", "status", "effort", "position")
    extra = 0


class BranchInline(admin.TabularInline):
    model = Branch
    fields = ("name",)
    extra = 0


@admin.register(Sprint)
class SprintAdmin(admin.ModelAdmin):
    list_display = ("title", "slug", "date_start", "date_finish", "state", "is_private", "deleted_at")
    list_filter = ("state", "is_private")
    search_fields = ("title", "slug")
    prepopulated_fields = {"slug": ("title",)}
    inlines = [IssueInline, BranchInline]

    def get_queryset(self, request):
        return Sprint.all_objects.all()


@admin.register(ConfigStatus)
class ConfigStatusAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "slug", "position", "is_closed")
    list_filter = ("type",)


@admin.register(Issue)
class IssueAdmin(admin.ModelAdmin):
    list_display = ("title", "sprint", "type", "status", "effort", "position")
    list_filter = ("type", "status")
    search_fields = ("title",)
    filter_horizontal = ("members",)


class CommitFileInline(admin.TabularInline):
    model = CommitFile
    extra = 0


@admin.register(Commit)
class CommitAdmin(admin.ModelAdmin):
    list_display = ("sha", "branch", "author_name", "committed_at")
    inlines = [CommitFileInline]


admin.site.register(
    [ProductBacklog, ConfigEffort, ConfigIssueType, IssueStatusChange, Branch, PullRequest, Comment, Note]
)
