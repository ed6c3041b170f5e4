"""Data models for backlogs, sprints, issues and the code attached to them."""

from django.conf import settings
from django.contrib.contenttypes.fields import GenericForeignKey, GenericRelation
from django.contrib.contenttypes.models import ContentType
from django.db import models
from django.utils import timezone

from scrum import metrics


class Comment(models.Model):
    """A comment attached to any commentable object (sprints, for now)."""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL)
    content_type = models.ForeignKey(ContentType, on_delete=models.CASCADE)
    object_id = models.PositiveBigIntegerField()
    commentable = GenericForeignKey("content_type", "object_id")
    body = models.TextField()
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "comments"
        ordering = ["-created_at", "-id"]
        indexes = [models.Index(fields=["content_type", "object_id"], name="comments_target_idx")]

    def __str__(self) -> str:
        return f"Comment #{self.pk}"


class Note(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL)
    content_type = models.ForeignKey(ContentType, on_delete=models.CASCADE)
    object_id = models.PositiveBigIntegerField()
    noteable = GenericForeignKey("content_type", "object_id")
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    position = models.PositiveIntegerField(default=0)
    closed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "notes"
        ordering = ["position", "id"]

    def __str__(self) -> str:
        return self.title


class ProductBacklog(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL)
    slug = models.SlugField(max_length=255, unique=True)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    is_private = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "product_backlogs"

    def __str__(self) -> str:
        return self.title


class ConfigStatusQuerySet(models.QuerySet):
    def of_type(self, type_: str):
        """Statuses that apply to one kind of object (``"issue"``, ``"sprint"``...)."""
        return self.filter(type=type_).order_by("position", "id")


class ConfigStatus(models.Model):
    """Lookup table of workflow statuses."""

    type = models.CharField(max_length=50)
    slug = models.SlugField(max_length=100)
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    color = models.CharField(max_length=7, blank=True)
    position = models.PositiveIntegerField(default=0)
    is_closed = models.BooleanField(default=False)

    objects = ConfigStatusQuerySet.as_manager()

    class Meta:
        db_table = "config_statuses"
        ordering = ["position", "id"]
        constraints = [
            models.UniqueConstraint(fields=["type", "slug"], name="config_status_type_slug"),
        ]

    def __str__(self) -> str:
        return self.name


class ConfigEffort(models.Model):
    """Lookup table of estimation values (story points)."""

    title = models.CharField(max_length=50)
    effort = models.FloatField(default=0)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "config_efforts"
        ordering = ["position", "id"]

    def __str__(self) -> str:
        return self.title


class ConfigIssueType(models.Model):
    slug = models.SlugField(max_length=100, unique=True)
    title = models.CharField(max_length=100)
    color = models.CharField(max_length=7, blank=True)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "config_issue_types"
        ordering = ["position", "id"]

    def __str__(self) -> str:
        return self.title


class SprintQuerySet(models.QuerySet):
    def alive(self):
        return self.filter(deleted_at__isnull=True)


class SprintManager(models.Manager.from_queryset(SprintQuerySet)):
    """Default manager: hides soft-deleted sprints."""

    def get_queryset(self):
        return super().get_queryset().alive()


class Sprint(models.Model):
    class State(models.IntegerChoices):
        OPEN = 0, "Open"
        CLOSED = 1, "Closed"

    user = models.ForeignKey(settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL)
    product_backlog = models.ForeignKey(
        ProductBacklog,
        null=True,
        blank=True,
        on_delete=models.CASCADE,
        related_name="sprints",
    )
    slug = models.SlugField(max_length=255, unique=True)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    version = models.CharField(max_length=50, blank=True)
    is_private = models.BooleanField(default=False)
    date_start = models.DateField(null=True, blank=True)
    date_finish = models.DateField(null=True, blank=True)
    state = models.SmallIntegerField(choices=State.choices, default=State.OPEN)
    color = models.CharField(max_length=7, blank=True)
    position = models.PositiveIntegerField(default=0)
    closed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    comments = GenericRelation(Comment, related_query_name="sprint")
    notes = GenericRelation(Note, related_query_name="sprint")

    objects = SprintManager()
    all_objects = SprintQuerySet.as_manager()

    class Meta:
        db_table = "sprints"
        ordering = ["position", "id"]
        base_manager_name = "all_objects"

    def __str__(self) -> str:
        return self.title

    def soft_delete(self) -> None:
        self.deleted_at = timezone.now()
        self.save(update_fields=["deleted_at", "updated_at"])

    @property
    def visibility(self) -> str:
        return metrics.visibility(self)

    @property
    def timebox(self) -> str:
        return metrics.timebox(self)


class Issue(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="created_issues",
    )
    sprint = models.ForeignKey(Sprint, null=True, blank=True, on_delete=models.SET_NULL, related_name="issues")
    type = models.ForeignKey(ConfigIssueType, null=True, blank=True, on_delete=models.SET_NULL, related_name="issues")
    status = models.ForeignKey(ConfigStatus, null=True, blank=True, on_delete=models.SET_NULL, related_name="issues")
    effort = models.ForeignKey(ConfigEffort, null=True, blank=True, on_delete=models.SET_NULL, related_name="issues")
    members = models.ManyToManyField(settings.AUTH_USER_MODEL, blank=True, related_name="assigned_issues")
    slug = models.SlugField(max_length=255, blank=True)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    position = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    closed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "issues"
        ordering = ["position", "id"]

    def __str__(self) -> str:
        return self.title


class IssueStatusChange(models.Model):
    """One entry in an issue's status history (the sprint activity feed)."""

    issue = models.ForeignKey(Issue, on_delete=models.CASCADE, related_name="status_changes")
    status = models.ForeignKey(ConfigStatus, null=True, blank=True, on_delete=models.SET_NULL, related_name="+")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name="+")
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "issue_status_changes"
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.issue_id} -> {self.status_id}"


class Branch(models.Model):
    sprint = models.ForeignKey(Sprint, on_delete=models.CASCADE, related_name="branches")
    name = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "branches"
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["sprint", "name"], name="branch_sprint_name"),
        ]

    def __str__(self) -> str:
        return self.name


class Commit(models.Model):
    branch = models.ForeignKey(Branch, on_delete=models.CASCADE, related_name="commits")
    sha = models.CharField(max_length=40)
    message = models.TextField(blank=True)
    author_name = models.CharField(max_length=255, blank=True)
    committed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "commits"
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["branch", "sha"], name="commit_branch_sha"),
        ]

    def __str__(self) -> str:
        return self.sha[:7]


class CommitFile(models.Model):
    commit = models.ForeignKey(Commit, on_delete=models.CASCADE, related_name="files")
    filename = models.CharField(max_length=1024)
    status = models.CharField(max_length=20, blank=True)
    additions = models.PositiveIntegerField(default=0)
    deletions = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "commit_files"
        ordering = ["id"]

    def __str__(self) -> str:
        return self.filename


class PullRequest(models.Model):
    branch = models.ForeignKey(Branch, on_delete=models.CASCADE, related_name="pull_requests")
    number = models.PositiveIntegerField()
    title = models.CharField(max_length=256)
    state = models.CharField(max_length=20, default="open")
    url = models.URLField(max_length=500, blank=True)
    created_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "pull_requests"
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["branch", "number"], name="pull_request_branch_number"),
        ]

    def __str__(self) -> str:
        return f"#{self.number} {self.title}"
