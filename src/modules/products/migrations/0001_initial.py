import uuid6
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField()),
                (
                    "updated_at",
                    models.DateTimeField(blank=True, default=None, null=True),
                ),
                ("name", models.CharField(max_length=200)),
                ("brand", models.CharField(max_length=100)),
                ("sku", models.CharField(db_index=True, max_length=64)),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("Electronics", "Electronics & Technology"),
                            ("Clothing", "Clothing & Fashion"),
                            ("Books", "Books & Media"),
                            ("Home", "Home & Garden"),
                        ],
                        max_length=20,
                    ),
                ),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("release_date", models.DateTimeField()),
                (
                    "image_url",
                    models.URLField(
                        blank=True, default=None, max_length=2048, null=True
                    ),
                ),
                ("is_available", models.BooleanField(default=True)),
                ("stock_quantity", models.PositiveIntegerField(default=1)),
            ],
            options={
                "db_table": "products",
                "ordering": ["name"],
                "indexes": [
                    models.Index(
                        fields=["name", "brand"], name="products_name_brand_idx"
                    ),
                    models.Index(
                        fields=["created_at"], name="products_created_at_idx"
                    ),
                ],
            },
        ),
    ]
