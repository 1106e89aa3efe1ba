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
            name="Point",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("points", models.IntegerField()),
                ("granted_at", models.DateTimeField(db_index=True, default=core.datetime_utils.now)),
                ("description", models.CharField(max_length=255)),
                ("kind", models.CharField(choices=[("daily_login", "Daily login"), ("weekly_login", "Weekly login"), ("first_attempt", "First attempt"), ("daily_attempt", "Daily attempt"), ("correct_answer", "Correct answer"), ("first_place", "First place")], max_length=32)),
                ("question_id", models.PositiveIntegerField(blank=True, null=True)),
                ("window_key", models.CharField(max_length=32)),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="points_ledger", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-granted_at"],
                "indexes": [
                    models.Index(fields=["user", "description"], name="gamificatio_user_id_1d4f6b_idx"),
                    models.Index(fields=["granted_at", "user"], name="gamificatio_granted_9e03a7_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("user", "description", "window_key"), name="unique_point_award_per_window"),
                    models.UniqueConstraint(condition=models.Q(("kind", "first_place")), fields=("description",), name="unique_first_place_per_question"),
                ],
            },
        ),
    ]
