from django.db import migrations, models
import django.db.models.deletion
import entries.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Entry',
            fields=[
                ('id', models.CharField(default=entries.models.new_entry_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ('fingerprint', models.CharField(blank=True, db_index=True, max_length=64, null=True)),
                ('kind', models.CharField(choices=[('task', 'Task'), ('note', 'Note'), ('exam', 'Exam'), ('study_session', 'Study session')], default='task', max_length=16)),
                ('date', models.DateField(db_index=True)),
                ('subject', models.CharField(blank=True, default='', max_length=255)),
                ('task', models.TextField()),
                ('completed', models.BooleanField(default=False)),
                ('position', models.IntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('parent', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='children', to='entries.entry')),
            ],
            options={
                'ordering': ['date', 'position', 'created_at'],
                'indexes': [models.Index(fields=['date', 'position'], name='idx_entry_date_position')],
            },
        ),
    ]
