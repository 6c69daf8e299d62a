import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.AutoField(primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=200, unique=True)),
                ("price", models.DecimalField(decimal_places=3, max_digits=12)),
                (
                    "added_at",
                    models.DateTimeField(default=django.utils.timezone.now),
                ),
                ("labels", models.JSONField(default=list)),
            ],
            options={
                "ordering": ["id"],
            },
        ),
    ]
