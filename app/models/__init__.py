# __init__.py
from app.models import job
from app.models import company

__all__ = [
	"company",
	"job",
]
