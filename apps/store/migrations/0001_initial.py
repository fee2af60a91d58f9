# Generated manually for the document store

import apps.store.models
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='StoredDocument',
            fields=[
                ('id', models.CharField(default=apps.store.models.generate_document_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ('collection', models.CharField(choices=[('sellers', 'Sellers'), ('purchases', 'Purchases'), ('bills', 'Bills')], max_length=32)),
                ('data', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'stored_documents',
                'ordering': ['created_at'],
                'indexes': [models.Index(fields=['collection', 'created_at'], name='stored_docu_collect_3f1b2c_idx')],
            },
        ),
    ]
