"""
Configuration constants for the honors GPA calculator.

Values follow the CSU a-g GPA policy: honors points for at most 8 semesters,
of which at most 2 may come from 10th grade. Callers that model a different
policy pass their own HonorsPolicy instead of editing these.
"""

# =============================================================================
# HONORS CAPS
# =============================================================================

# Max honors semesters admitted from the capped tier (10th grade)
DEFAULT_TIER_SUB_CAP = 2

# Max honors semesters admitted overall, capped tier included
DEFAULT_AGGREGATE_CAP = 8

# Tier that carries its own sub-cap
DEFAULT_CAPPED_TIER = "10"


# =============================================================================
# CREDIT LIMITS
# =============================================================================

# A course row must carry 0 < credits <= MAX_CREDIT_WEIGHT
MAX_CREDIT_WEIGHT = 6.0

# Digits with at most one decimal place ("3", "4.5")
CREDIT_STRING_PATTERN = r"^\d+(\.\d)?$"


# =============================================================================
# ROUNDING
# =============================================================================

GPA_DECIMALS = 3
TOTAL_POINTS_DECIMALS = 2


# =============================================================================
# CSV LEDGER COLUMNS
# =============================================================================

REQUIRED_CSV_COLUMNS = ["name", "grade", "credits", "honors", "counts", "grade_level"]
OPTIONAL_CSV_COLUMNS = ["id", "student_id"]

# Cell values read as True in boolean CSV columns
TRUTHY_VALUES = {"yes", "y", "true", "t", "1", "x"}
