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
            name="ActivityEvent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("type", models.CharField(choices=[("login", "Login"), ("impersonated", "Impersonated"), ("logout", "Logout"), ("logout_all", "Logout (all devices)"), ("submit_answer", "Submit answer")], db_index=True, max_length=32)),
                ("payload", models.JSONField(blank=True, default=dict)),
                ("triggered_at", models.DateTimeField(db_index=True, default=core.datetime_utils.now)),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="events", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-triggered_at"],
                "indexes": [
                    models.Index(fields=["type", "user"], name="core_activi_type_7c1f0e_idx"),
                    models.Index(fields=["user", "-triggered_at"], name="core_activi_user_id_3b9d2a_idx"),
                ],
            },
        ),
    ]
