"""
Manager for the email-identified User.

Billing only needs a stable user id and an email to hand to Stripe, so the
manager keeps account creation to those two things plus the admin flags
`createsuperuser` sets.
"""

from django.contrib.auth.models import BaseUserManager


class UserManager(BaseUserManager):
    """
    Creates users keyed by email.

    Usage:
        user = User.objects.create_user(email="member@example.com", password="...")
        billing_user_id = str(user.pk)
    """

    def create_user(self, email, password=None, **extra_fields):
        """
        Save a user with a normalized email.

        Users created without a password (e.g. by fixtures or the admin) get
        an unusable one and can only authenticate once a password is set.

        Raises:
            ValueError: If email is not provided
        """
        if not email:
            raise ValueError("The Email field must be set")

        user = self.model(email=self.normalize_email(email), **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """Save a user with staff and superuser access to the billing admin."""
        extra_fields.update(is_staff=True, is_superuser=True)
        return self.create_user(email, password, **extra_fields)
