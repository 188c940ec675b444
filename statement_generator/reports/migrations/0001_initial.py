import django.core.validators
from django.db import migrations, models

import reports.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='StatementRequest',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('sender_name', models.CharField(max_length=255)),
                ('sender_address', models.TextField()),
                ('recipient_name', models.CharField(max_length=255)),
                ('recipient_address', models.TextField()),
                ('spreadsheet', models.FileField(upload_to=reports.models.spreadsheet_upload_to, validators=[django.core.validators.FileExtensionValidator(['xlsx', 'xlsm'])])),
                ('logo', models.FileField(blank=True, null=True, upload_to=reports.models.logo_upload_to, validators=[django.core.validators.FileExtensionValidator(['png', 'jpg', 'jpeg'])])),
                ('pdf_file', models.FileField(blank=True, null=True, upload_to='statements/pdf/')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'ordering': ['-created_at'],
                'get_latest_by': 'created_at',
            },
        ),
    ]
