"""
==============================================================================
CORE APP - MODELS
==============================================================================
This module defines the marketplace models for LusionBeatz.

Key Models:
    - Sample: A loop or one-shot uploaded by a creator
    - Cart / CartItem: Samples a user intends to buy
    - Order: A purchase paid by manual UPI transfer, identified by its UTR
    - OrderItem: One purchased sample with price and earnings snapshot

The Purchase Flow:
    1. Creator uploads a Sample (status: pending)
    2. Admin approves it; it appears in the catalog
    3. Buyer adds samples to the Cart
    4. Buyer pays the platform UPI ID and submits the UTR
    5. Order + OrderItems are created, the Cart is emptied
    6. Each OrderItem records the creator's and the platform's share

Author: LusionBeatz Development Team
==============================================================================
"""

from decimal import Decimal

from django.conf import settings
from django.core.validators import FileExtensionValidator, MaxValueValidator, MinValueValidator
from django.db import IntegrityError, models, transaction
from django.utils import timezone

ORDER_NUMBER_ATTEMPTS = 5


class Sample(models.Model):
    """
    A music sample sold on the marketplace.

    Only ``approved`` samples are visible in the catalog and can be added
    to a cart. Creators always see their own uploads.

    Attributes:
        title (str): Display title
        sample_type (str): 'loop' or 'oneshot'
        genre (str): Free-text genre (e.g., Hip Hop)
        bpm (int): Tempo, mostly relevant for loops
        key (str): Musical key (e.g., C Minor)
        price (Decimal): Price in INR
        status (str): Moderation status
        audio_file (File): The sample itself (wav/mp3)
        cover_image (Image): Optional artwork
        creator (FK): Uploading user
    """

    TYPE_CHOICES = [
        ('loop', 'Loop'),
        ('oneshot', 'One-Shot'),
    ]

    STATUS_CHOICES = [
        ('pending', 'Pending Approval'),
        ('approved', 'Approved'),
        ('rejected', 'Rejected'),
    ]

    title = models.CharField(
        max_length=200,
        help_text="Sample title as displayed to buyers"
    )

    sample_type = models.CharField(
        max_length=10,
        choices=TYPE_CHOICES,
        default='loop',
        help_text="Loop or one-shot"
    )

    genre = models.CharField(
        max_length=100,
        blank=True,
        help_text="Genre (e.g., Hip Hop, Trap, Lo-Fi)"
    )

    bpm = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(20), MaxValueValidator(400)],
        help_text="Tempo in beats per minute"
    )

    key = models.CharField(
        max_length=20,
        blank=True,
        help_text="Musical key (e.g., C Minor)"
    )

    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        help_text="Price in INR"
    )

    description = models.TextField(
        blank=True,
        help_text="What the sample contains"
    )

    status = models.CharField(
        max_length=10,
        choices=STATUS_CHOICES,
        default='pending',
        help_text="Only approved samples are listed in the catalog"
    )

    audio_file = models.FileField(
        upload_to='samples/audio/',
        validators=[FileExtensionValidator(allowed_extensions=settings.ALLOWED_AUDIO_EXTENSIONS)],
        help_text="Audio file (wav or mp3)"
    )

    cover_image = models.ImageField(
        upload_to='samples/covers/',
        blank=True,
        null=True,
        help_text="Cover art shown on the sample card"
    )

    creator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='samples',
        help_text="Creator who uploaded this sample"
    )

    reviewed_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When an admin approved or rejected the sample"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Sample'
        verbose_name_plural = 'Samples'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.title} (₹{self.price})"

    def get_audio_url(self):
        return self.audio_file.url if self.audio_file else None

    def get_cover_url(self):
        return self.cover_image.url if self.cover_image else None

    def is_approved(self):
        return self.status == 'approved'

    def set_status(self, status):
        """Record a moderation decision."""
        self.status = status
        self.reviewed_at = timezone.now()
        self.save(update_fields=['status', 'reviewed_at', 'updated_at'])


class Cart(models.Model):
    """
    Shopping cart of a user. Created on first use.

    Digital samples are bought once, so the cart holds distinct samples
    without quantities.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='cart',
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Cart'
        verbose_name_plural = 'Carts'

    def __str__(self):
        return f"Cart of {self.user.email}"

    def samples(self):
        """Samples in the cart, oldest addition first."""
        items = self.items.select_related('sample', 'sample__creator').order_by('added_at', 'id')
        return [item.sample for item in items]

    def total(self):
        """Sum of the current prices of all samples in the cart."""
        return self.items.aggregate(
            total=models.Sum('sample__price')
        )['total'] or Decimal('0.00')

    def is_empty(self):
        return not self.items.exists()

    def clear(self):
        self.items.all().delete()


class CartItem(models.Model):
    cart = models.ForeignKey(
        Cart,
        on_delete=models.CASCADE,
        related_name='items',
    )

    sample = models.ForeignKey(
        Sample,
        on_delete=models.CASCADE,
        related_name='cart_items',
    )

    added_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'Cart Item'
        verbose_name_plural = 'Cart Items'
        ordering = ['added_at']
        # One of each sample per cart
        unique_together = ['cart', 'sample']

    def __str__(self):
        return f"{self.sample.title} in {self.cart}"


class Order(models.Model):
    """
    A purchase paid by manual UPI transfer.

    The buyer pays the platform UPI ID and submits the UTR (Unique
    Transaction Reference) printed by their payment app. Each UTR can back
    only one order.

    Attributes:
        order_number (str): Human readable number, e.g. LB-20260108-0001
        buyer (FK): User who placed the order
        amount (Decimal): Total paid in INR
        creator_earning (Decimal): Sum of creator shares
        platform_earning (Decimal): Sum of platform shares
        utr (str): Transaction reference entered at checkout
    """

    order_number = models.CharField(
        max_length=20,
        unique=True,
        editable=False,
        help_text="System-generated unique order number"
    )

    buyer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='orders',
        help_text="User who placed this order (empty once the account is deleted)"
    )

    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        help_text="Total order value in INR"
    )

    creator_earning = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        help_text="Total owed to creators for this order"
    )

    platform_earning = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        help_text="Platform commission for this order"
    )

    utr = models.CharField(
        max_length=20,
        unique=True,
        help_text="UPI transaction reference submitted by the buyer"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Order'
        verbose_name_plural = 'Orders'
        ordering = ['-created_at']

    def __str__(self):
        return f"Order {self.order_number} - ₹{self.amount}"

    @staticmethod
    def next_order_number():
        """
        Next free number for today.

        Format: LB-YYYYMMDD-XXXX (e.g., LB-20260108-0001). The sequence
        keeps growing past 9999, so the highest suffix is found numerically.
        """
        prefix = f"LB-{timezone.localdate().strftime('%Y%m%d')}-"
        numbers = Order.objects.filter(
            order_number__startswith=prefix
        ).values_list('order_number', flat=True)

        last_seq = max((int(number.rsplit('-', 1)[-1]) for number in numbers), default=0)
        return f"{prefix}{last_seq + 1:04d}"

    def save(self, *args, **kwargs):
        """
        Auto-generate the order number.

        Two orders saved at the same moment can pick the same number; the
        loser retries with a fresh one. Any other integrity error (such as a
        reused UTR) is raised as is.
        """
        if self.order_number:
            return super().save(*args, **kwargs)

        for attempt in range(ORDER_NUMBER_ATTEMPTS):
            self.order_number = self.next_order_number()
            try:
                with transaction.atomic():
                    super().save(*args, **kwargs)
                return
            except IntegrityError:
                taken = Order.objects.filter(order_number=self.order_number).exists()
                self.order_number = ''
                if not taken or attempt == ORDER_NUMBER_ATTEMPTS - 1:
                    raise

    def sample_count(self):
        return self.items.count()

    def includes_sample(self, sample_id):
        return self.items.filter(sample_id=sample_id).exists()


class OrderItem(models.Model):
    """
    One sample inside an order.

    Title, price and the earnings split are stored at purchase time so the
    order stays correct if the sample is edited or deleted later.
    """

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='items',
        help_text="The order this item belongs to"
    )

    sample = models.ForeignKey(
        Sample,
        on_delete=models.SET_NULL,
        null=True,
        related_name='order_items',
        help_text="Purchased sample"
    )

    creator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='sales',
        help_text="Creator who receives the creator share"
    )

    sample_title = models.CharField(
        max_length=200,
        help_text="Sample title (stored for historical reference)"
    )

    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text="Price paid for this sample"
    )

    creator_earning = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
    )

    platform_earning = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'Order Item'
        verbose_name_plural = 'Order Items'
        ordering = ['created_at', 'id']

    def __str__(self):
        return f"{self.sample_title} (₹{self.price})"
