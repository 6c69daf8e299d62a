from django.db import models
from django.utils import timezone


class ProductLabel(models.TextChoices):
    DRINK = "drink", "Drink"
    FOOD = "food", "Food"
    CLOTHES = "clothes", "Clothes"
    LIMITED = "limited", "Limited"


class Product(models.Model):
    id = models.AutoField(primary_key=True)
    name = models.CharField(max_length=200, unique=True)
    # Three fractional digits so unit prices like 5.005 survive until checkout rounding
    price = models.DecimalField(max_digits=12, decimal_places=3)
    added_at = models.DateTimeField(default=timezone.now)
    labels = models.JSONField(default=list)

    def __str__(self):
        return self.name

    class Meta:
        ordering = ["id"]
