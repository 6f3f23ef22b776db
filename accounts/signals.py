import logging

from django.db.models.signals import post_save
from django.dispatch import receiver
from django.contrib.auth import get_user_model

from savings.models import Savings

logger = logging.getLogger(__name__)

Member = get_user_model()


@receiver(post_save, sender=Member)
def create_member_savings(sender, instance, created, **kwargs):
    if created:
        Savings.objects.get_or_create(member=instance)
        logger.info(f"Created savings record for {instance.member_number}")
