"""Domain models used across application layer boundaries."""

from .dataset import DatasetLoadError, domain_dataset_load, domain_dataset_parse
from .models import Address, CardType, Color, Customer, HealthStatus, Order, OrderItem, PaymentInfo, Product

__all__ = [
	"Address",
	"CardType",
	"Color",
	"Customer",
	"HealthStatus",
	"Order",
	"OrderItem",
	"PaymentInfo",
	"Product",
	"DatasetLoadError",
	"domain_dataset_load",
	"domain_dataset_parse",
]
