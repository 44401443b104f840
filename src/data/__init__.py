from .institutions import get_institutions
from .models import Institution, FilterCriteria, SortSpecification, InstitutionStatistics

__all__ = ["get_institutions", "Institution", "FilterCriteria", "SortSpecification", "InstitutionStatistics"]
