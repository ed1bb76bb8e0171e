from django.db import models, transaction
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.core.validators import MaxLengthValidator, MinValueValidator
from django.utils import timezone
from core.constants import USER_TYPE_CHOICES, AVAILABILITY_CHOICES


class UserManager(BaseUserManager):
    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError("The email must be set")
        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('user_type', 'customer')
        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    username = None
    name = models.CharField(max_length=150)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=30)
    user_type = models.CharField(max_length=10, choices=USER_TYPE_CHOICES)
    profile_picture = models.ImageField(upload_to='profile_pictures/', blank=True)

    city = models.CharField(max_length=100, blank=True)
    address = models.CharField(max_length=255, blank=True)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)

    # Worker-specific fields
    services = models.ManyToManyField('catalog.Service', blank=True, related_name='workers')
    skills = models.JSONField(default=list, blank=True)
    experience = models.PositiveIntegerField(default=0)
    hourly_rate = models.FloatField(default=0, validators=[MinValueValidator(0)])
    availability = models.CharField(max_length=10, choices=AVAILABILITY_CHOICES, default='available')
    bio = models.TextField(blank=True, validators=[MaxLengthValidator(500)])

    # Running mean of every review received
    rating_average = models.FloatField(default=0)
    rating_count = models.PositiveIntegerField(default=0)

    is_verified = models.BooleanField(default=False)
    last_active = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    objects = UserManager()

    class Meta:
        indexes = [
            models.Index(fields=['user_type', 'is_active']),
            models.Index(fields=['city']),
        ]

    def __str__(self):
        return f"{self.name} <{self.email}> ({self.user_type})"

    @property
    def is_customer(self):
        return self.user_type == 'customer'

    @property
    def is_worker(self):
        return self.user_type == 'worker'

    def update_rating(self, new_rating):
        """Fold one more score into the running average and persist it."""
        total_rating = self.rating_average * self.rating_count + new_rating
        self.rating_count += 1
        self.rating_average = total_rating / self.rating_count
        self.save(update_fields=['rating_average', 'rating_count'])

    @classmethod
    def apply_rating(cls, user_id, new_rating):
        """
        Update a user's rating under a row lock so concurrent reviews of the
        same user never read a stale (average, count) pair.
        """
        with transaction.atomic():
            user = cls.objects.select_for_update().get(pk=user_id)
            user.update_rating(new_rating)
        return user


class PortfolioItem(models.Model):
    worker = models.ForeignKey(User, on_delete=models.CASCADE, related_name='portfolio')
    title = models.CharField(max_length=200)
    description = models.TextField()
    image = models.ImageField(upload_to='portfolio/', blank=True)
    completed_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['-completed_at', '-id']

    def __str__(self):
        return f"{self.title} - {self.worker.name}"
