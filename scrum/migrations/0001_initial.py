import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("contenttypes", "0002_remove_content_type_name"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Comment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("object_id", models.PositiveBigIntegerField()),
                ("body", models.TextField()),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("content_type", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="contenttypes.contenttype")),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "comments",
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["content_type", "object_id"], name="comments_target_idx")],
            },
        ),
        migrations.CreateModel(
            name="Note",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("object_id", models.PositiveBigIntegerField()),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("position", models.PositiveIntegerField(default=0)),
                ("closed_at", models.DateTimeField(blank=True, null=True)),
                ("content_type", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="contenttypes.contenttype")),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "notes",
                "ordering": ["position", "id"],
            },
        ),
        migrations.CreateModel(
            name="ProductBacklog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("slug", models.SlugField(max_length=255, unique=True)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("is_private", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "product_backlogs",
            },
        ),
        migrations.CreateModel(
            name="ConfigStatus",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("type", models.CharField(max_length=50)),
                ("slug", models.SlugField(max_length=100)),
                ("name", models.CharField(max_length=100)),
                ("description", models.TextField(blank=True)),
                ("color", models.CharField(blank=True, max_length=7)),
                ("position", models.PositiveIntegerField(default=0)),
                ("is_closed", models.BooleanField(default=False)),
            ],
            options={
                "db_table": "config_statuses",
                "ordering": ["position", "id"],
                "constraints": [models.UniqueConstraint(fields=("type", "slug"), name="config_status_type_slug")],
            },
        ),
        migrations.CreateModel(
            name="ConfigEffort",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=50)),
                ("effort", models.FloatField(default=0)),
                ("position", models.PositiveIntegerField(default=0)),
            ],
            options={
                "db_table": "config_efforts",
                "ordering": ["position", "id"],
            },
        ),
        migrations.CreateModel(
            name="ConfigIssueType",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("slug", models.SlugField(max_length=100, unique=True)),
                ("title", models.CharField(max_length=100)),
                ("color", models.CharField(blank=True, max_length=7)),
                ("position", models.PositiveIntegerField(default=0)),
            ],
            options={
                "db_table": "config_issue_types",
                "ordering": ["position", "id"],
            },
        ),
        migrations.CreateModel(
            name="Sprint",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("slug", models.SlugField(max_length=255, unique=True)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("version", models.CharField(blank=True, max_length=50)),
                ("is_private", models.BooleanField(default=False)),
                ("date_start", models.DateField(blank=True, null=True)),
                ("date_finish", models.DateField(blank=True, null=True)),
                ("state", models.SmallIntegerField(choices=[(0, "Open"), (1, "Closed")], default=0)),
                ("color", models.CharField(blank=True, max_length=7)),
                ("position", models.PositiveIntegerField(default=0)),
                ("closed_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("deleted_at", models.DateTimeField(blank=True, null=True)),
                ("product_backlog", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="sprints", to="scrum.productbacklog")),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "sprints",
                "ordering": ["position", "id"],
                "base_manager_name": "all_objects",
            },
        ),
        migrations.CreateModel(
            name="Issue",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("slug", models.SlugField(blank=True, max_length=255)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("position", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("closed_at", models.DateTimeField(blank=True, null=True)),
                ("effort", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="issues", to="scrum.configeffort")),
                ("members", models.ManyToManyField(blank=True, related_name="assigned_issues", to=settings.AUTH_USER_MODEL)),
                ("sprint", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="issues", to="scrum.sprint")),
                ("status", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="issues", to="scrum.configstatus")),
                ("type", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="issues", to="scrum.configissuetype")),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="created_issues", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "issues",
                "ordering": ["position", "id"],
            },
        ),
        migrations.CreateModel(
            name="IssueStatusChange",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("issue", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="status_changes", to="scrum.issue")),
                ("status", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to="scrum.configstatus")),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "issue_status_changes",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="Branch",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("sprint", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="branches", to="scrum.sprint")),
            ],
            options={
                "db_table": "branches",
                "ordering": ["id"],
                "constraints": [models.UniqueConstraint(fields=("sprint", "name"), name="branch_sprint_name")],
            },
        ),
        migrations.CreateModel(
            name="Commit",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("sha", models.CharField(max_length=40)),
                ("message", models.TextField(blank=True)),
                ("author_name", models.CharField(blank=True, max_length=255)),
                ("committed_at", models.DateTimeField(blank=True, null=True)),
                ("branch", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="commits", to="scrum.branch")),
            ],
            options={
                "db_table": "commits",
                "ordering": ["id"],
                "constraints": [models.UniqueConstraint(fields=("branch", "sha"), name="commit_branch_sha")],
            },
        ),
        migrations.CreateModel(
            name="CommitFile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("filename", models.CharField(max_length=1024)),
                ("status", models.CharField(blank=True, max_length=20)),
                ("additions", models.PositiveIntegerField(default=0)),
                ("deletions", models.PositiveIntegerField(default=0)),
                ("commit", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="files", to="scrum.commit")),
            ],
            options={
                "db_table": "commit_files",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="PullRequest",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("number", models.PositiveIntegerField()),
                ("title", models.CharField(max_length=256)),
                ("state", models.CharField(default="open", max_length=20)),
                ("url", models.URLField(blank=True, max_length=500)),
                ("created_at", models.DateTimeField(blank=True, null=True)),
                ("branch", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="pull_requests", to="scrum.branch")),
            ],
            options={
                "db_table": "pull_requests",
                "ordering": ["id"],
                "constraints": [models.UniqueConstraint(fields=("branch", "number"), name="pull_request_branch_number")],
            },
        ),
    ]
