import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Sample',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(help_text='Sample title as displayed to buyers', max_length=200)),
                ('sample_type', models.CharField(choices=[('loop', 'Loop'), ('oneshot', 'One-Shot')], default='loop', help_text='Loop or one-shot', max_length=10)),
                ('genre', models.CharField(blank=True, help_text='Genre (e.g., Hip Hop, Trap, Lo-Fi)', max_length=100)),
                ('bpm', models.PositiveIntegerField(blank=True, help_text='Tempo in beats per minute', null=True, validators=[django.core.validators.MinValueValidator(20), django.core.validators.MaxValueValidator(400)])),
                ('key', models.CharField(blank=True, help_text='Musical key (e.g., C Minor)', max_length=20)),
                ('price', models.DecimalField(decimal_places=2, help_text='Price in INR', max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('description', models.TextField(blank=True, help_text='What the sample contains')),
                ('status', models.CharField(choices=[('pending', 'Pending Approval'), ('approved', 'Approved'), ('rejected', 'Rejected')], default='pending', help_text='Only approved samples are listed in the catalog', max_length=10)),
                ('audio_file', models.FileField(help_text='Audio file (wav or mp3)', upload_to='samples/audio/', validators=[django.core.validators.FileExtensionValidator(allowed_extensions=['wav', 'mp3'])])),
                ('cover_image', models.ImageField(blank=True, help_text='Cover art shown on the sample card', null=True, upload_to='samples/covers/')),
                ('reviewed_at', models.DateTimeField(blank=True, help_text='When an admin approved or rejected the sample', null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('creator', models.ForeignKey(help_text='Creator who uploaded this sample', on_delete=django.db.models.deletion.CASCADE, related_name='samples', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Sample',
                'verbose_name_plural': 'Samples',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Cart',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='cart', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Cart',
                'verbose_name_plural': 'Carts',
            },
        ),
        migrations.CreateModel(
            name='CartItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('added_at', models.DateTimeField(auto_now_add=True)),
                ('cart', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='core.cart')),
                ('sample', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='cart_items', to='core.sample')),
            ],
            options={
                'verbose_name': 'Cart Item',
                'verbose_name_plural': 'Cart Items',
                'ordering': ['added_at'],
                'unique_together': {('cart', 'sample')},
            },
        ),
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('order_number', models.CharField(editable=False, help_text='System-generated unique order number', max_length=20, unique=True)),
                ('amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='Total order value in INR', max_digits=12)),
                ('creator_earning', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='Total owed to creators for this order', max_digits=12)),
                ('platform_earning', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='Platform commission for this order', max_digits=12)),
                ('utr', models.CharField(help_text='UPI transaction reference submitted by the buyer', max_length=20, unique=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('buyer', models.ForeignKey(help_text='User who placed this order (empty once the account is deleted)', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='orders', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Order',
                'verbose_name_plural': 'Orders',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='OrderItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('sample_title', models.CharField(help_text='Sample title (stored for historical reference)', max_length=200)),
                ('price', models.DecimalField(decimal_places=2, help_text='Price paid for this sample', max_digits=10)),
                ('creator_earning', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('platform_earning', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('creator', models.ForeignKey(help_text='Creator who receives the creator share', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='sales', to=settings.AUTH_USER_MODEL)),
                ('order', models.ForeignKey(help_text='The order this item belongs to', on_delete=django.db.models.deletion.CASCADE, related_name='items', to='core.order')),
                ('sample', models.ForeignKey(help_text='Purchased sample', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='order_items', to='core.sample')),
            ],
            options={
                'verbose_name': 'Order Item',
                'verbose_name_plural': 'Order Items',
                'ordering': ['created_at', 'id'],
            },
        ),
    ]
