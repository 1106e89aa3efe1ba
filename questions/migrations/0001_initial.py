import core.datetime_utils
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Database",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("slug", models.SlugField(max_length=64, unique=True)),
                ("description", models.CharField(blank=True, default="", max_length=255)),
                ("schema", models.TextField(help_text="SQL schema loaded into the sandbox")),
                ("relation_figure", models.CharField(max_length=1024, unique=True)),
            ],
        ),
        migrations.CreateModel(
            name="Question",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("category", models.CharField(help_text="e.g. 'query'", max_length=64)),
                ("difficulty", models.CharField(choices=[("unspecified", "Unspecified"), ("easy", "Easy"), ("medium", "Medium"), ("hard", "Hard")], default="medium", max_length=16)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField()),
                ("reference_answer", models.TextField()),
                ("database", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="questions", to="questions.database")),
            ],
        ),
        migrations.CreateModel(
            name="Submission",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("submitted_code", models.TextField()),
                ("status", models.CharField(choices=[("pending", "Pending"), ("success", "Success"), ("failed", "Failed")], db_index=True, max_length=16)),
                ("query_result", models.JSONField(blank=True, null=True)),
                ("error", models.TextField(blank=True, null=True)),
                ("submitted_at", models.DateTimeField(db_index=True, default=core.datetime_utils.now)),
                ("question", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="submissions", to="questions.question")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="submissions", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-submitted_at"],
                "indexes": [
                    models.Index(fields=["user", "question"], name="questions_s_user_id_5e2c41_idx"),
                    models.Index(fields=["question", "status", "submitted_at"], name="questions_s_questio_8a7d10_idx"),
                    models.Index(fields=["status", "submitted_at"], name="questions_s_status_c04b9e_idx"),
                ],
            },
        ),
    ]
