"""
==============================================================================
SEED DATA - Django Management Command
==============================================================================
Generate sample data for demo/testing purposes.

Creates:
    - Admin user
    - Approved creators with loops and one-shots
    - A pending creator and a pending sample for the console
    - Buyers with a few completed orders

Usage:
    python manage.py seed_data              # Create all seed data
    python manage.py seed_data --clear      # Clear existing data first

Author: LusionBeatz Development Team
==============================================================================
"""

import io
import random
import wave
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.files.base import ContentFile
from django.core.management.base import BaseCommand

from core.cart import add_to_cart
from core.checkout import CheckoutError, place_order
from core.models import Order, Sample

CustomUser = get_user_model()

DEMO_PASSWORD = 'demo1234'

SAMPLES = [
    # (title, type, genre, bpm, key, price)
    ('Midnight Trap Loop', 'loop', 'Trap', 140, 'C Minor', '499'),
    ('Lo-Fi Rain Keys', 'loop', 'Lo-Fi', 82, 'F Major', '299'),
    ('Desi Drill Bounce', 'loop', 'Drill', 144, 'G Minor', '599'),
    ('Sunset House Groove', 'loop', 'House', 124, 'A Minor', '399'),
    ('Punchy 808 Kick', 'oneshot', 'Trap', None, 'C', '99'),
    ('Crispy Clap', 'oneshot', 'Hip Hop', None, '', '49'),
    ('Tabla Hit Dha', 'oneshot', 'World', None, 'D', '149'),
    ('Vinyl Snare', 'oneshot', 'Lo-Fi', None, '', '79'),
]


def silent_wav(seconds=1, rate=8000):
    """A short silent WAV, enough for the players to render."""
    buffer = io.BytesIO()
    with wave.open(buffer, 'wb') as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(rate)
        wav.writeframes(b'\x00\x00' * rate * seconds)
    return buffer.getvalue()


class Command(BaseCommand):
    help = 'Generate sample data for LusionBeatz demo'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before seeding'
        )

    def handle(self, *args, **options):
        self.stdout.write(self.style.NOTICE('=' * 60))
        self.stdout.write(self.style.NOTICE('LusionBeatz Seed Data Generator'))
        self.stdout.write(self.style.NOTICE('=' * 60))

        if options['clear']:
            self.clear_data()

        self.create_users()
        self.create_samples()
        self.create_orders()

        self.stdout.write(self.style.SUCCESS('\n✅ Seed data created successfully!'))
        self.stdout.write(self.style.NOTICE('\nDemo Accounts:'))
        self.stdout.write('  Admin:   admin@lusionbeatz.in / admin123')
        self.stdout.write(f'  Creator: creator1@lusionbeatz.in / {DEMO_PASSWORD}')
        self.stdout.write(f'  Buyer:   buyer1@lusionbeatz.in / {DEMO_PASSWORD}')

    def clear_data(self):
        """Clear existing data."""
        self.stdout.write('Clearing existing data...')

        Order.objects.all().delete()
        Sample.objects.all().delete()

        # Keep admin, delete demo users
        CustomUser.objects.filter(email__endswith='@lusionbeatz.in').exclude(role='admin').delete()

        self.stdout.write(self.style.SUCCESS('  ✓ Data cleared'))

    def make_user(self, email, name, **extra):
        user, created = CustomUser.objects.get_or_create(
            email=email,
            defaults={'username': email, 'name': name, 'is_verified': True, **extra},
        )
        if created:
            user.set_password(DEMO_PASSWORD)
            user.save()
        return user

    def create_users(self):
        """Create admin, creators and buyers."""
        self.stdout.write('\nCreating users...')

        if not CustomUser.objects.filter(email='admin@lusionbeatz.in').exists():
            CustomUser.objects.create_superuser(
                username='admin@lusionbeatz.in',
                email='admin@lusionbeatz.in',
                password='admin123',
                name='Platform Admin',
                role='admin',
                is_verified=True,
            )
            self.stdout.write(self.style.SUCCESS('  ✓ Admin user created'))

        self.creators = [
            self.make_user('creator1@lusionbeatz.in', 'Beat Baba', approved_creator=True),
            self.make_user('creator2@lusionbeatz.in', 'Loop Rani', approved_creator=True),
        ]
        for creator in self.creators:
            profile = creator.profile
            if not profile.has_payout_details():
                profile.holder_name = creator.name
                profile.upi_id = creator.email.split('@')[0] + '@okaxis'
                profile.save()

        # Waiting in the console for approval
        self.make_user('newcreator@lusionbeatz.in', 'Fresh Producer')

        self.buyers = [
            self.make_user(f'buyer{i}@lusionbeatz.in', f'Buyer {i}') for i in range(1, 4)
        ]
        self.stdout.write(self.style.SUCCESS(
            f'  ✓ {len(self.creators)} creators and {len(self.buyers)} buyers ready'
        ))

    def create_samples(self):
        """Create approved samples plus one waiting for review."""
        self.stdout.write('\nCreating samples...')
        audio = silent_wav()

        self.samples = []
        for idx, (title, sample_type, genre, bpm, key, price) in enumerate(SAMPLES):
            creator = self.creators[idx % len(self.creators)]
            sample = Sample.objects.filter(title=title, creator=creator).first()
            if sample is None:
                sample = Sample(
                    title=title,
                    sample_type=sample_type,
                    genre=genre,
                    bpm=bpm,
                    key=key,
                    price=Decimal(price),
                    description=f'{genre} {sample_type} by {creator.name}',
                    creator=creator,
                )
                sample.audio_file.save(f'{title.lower().replace(" ", "_")}.wav', ContentFile(audio), save=False)
                sample.save()
                sample.set_status('approved')
            self.samples.append(sample)

        if not Sample.objects.filter(title='Unreviewed Synth Stab').exists():
            pending = Sample(
                title='Unreviewed Synth Stab',
                sample_type='oneshot',
                genre='EDM',
                price=Decimal('59'),
                creator=self.creators[0],
            )
            pending.audio_file.save('unreviewed_synth_stab.wav', ContentFile(audio), save=False)
            pending.save()

        self.stdout.write(self.style.SUCCESS(f'  ✓ {len(self.samples)} approved samples, 1 pending'))

    def create_orders(self):
        """Buy a few random samples for every buyer through the real checkout."""
        self.stdout.write('\nCreating orders...')

        order_count = 0
        for buyer in self.buyers:
            if buyer.orders.exists():
                continue
            for sample in random.sample(self.samples, k=3):
                add_to_cart(buyer, sample.pk)
            utr = ''.join(random.choices('0123456789', k=12))
            try:
                place_order(buyer, utr)
                order_count += 1
            except CheckoutError as e:
                self.stdout.write(self.style.WARNING(f'  ⚠ Order for {buyer.email} skipped: {e.message}'))

        self.stdout.write(self.style.SUCCESS(f'  ✓ {order_count} orders created'))
