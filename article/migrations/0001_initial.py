import article.models
from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Category",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                ("slug", models.SlugField(max_length=120, unique=True)),
                ("parent", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="children", to="article.category")),
            ],
            options={
                "verbose_name_plural": "categories",
                "db_table": "category",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Article",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200, validators=[django.core.validators.MinLengthValidator(2)])),
                ("slug", models.SlugField(max_length=220, unique=True)),
                ("description", models.TextField()),
                ("thumbnail", models.ImageField(blank=True, null=True, upload_to=article.models.upload_dir)),
                ("seo_title", models.CharField(blank=True, max_length=200)),
                ("seo_description", models.CharField(blank=True, max_length=300)),
                ("age_from", models.PositiveSmallIntegerField(default=0, validators=[django.core.validators.MaxValueValidator(60)])),
                ("age_to", models.PositiveSmallIntegerField(default=60, validators=[django.core.validators.MaxValueValidator(60)])),
                ("rating", models.PositiveSmallIntegerField(default=0, help_text="From 0 to 5", validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(5)])),
                ("link", models.URLField(blank=True, help_text="Url")),
                ("color", models.CharField(default="#000000", max_length=7)),
                ("data", models.JSONField(blank=True, default=list)),
                ("active", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("author", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="articles", to=settings.AUTH_USER_MODEL)),
                ("categories", models.ManyToManyField(blank=True, related_name="articles", to="article.category")),
            ],
            options={
                "db_table": "article",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="ArticleFile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("file", models.FileField(upload_to=article.models.upload_dir)),
                ("article", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="files", to="article.article")),
            ],
            options={
                "db_table": "article_file",
            },
        ),
        migrations.CreateModel(
            name="Comment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("content", models.TextField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("article", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="comments", to="article.article")),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="comments", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "comment",
                "ordering": ["-created_at"],
            },
        ),
    ]
