"""Shared constants for genomeapi endpoints, defaults and normalization limits.

This module is the single source of truth for upstream URLs and default values
consumed across configuration loading, the service clients and the auth layer.
"""

from __future__ import annotations

# Upstream endpoints
UCSC_API_BASE = "https://api.genome.ucsc.edu/"
UCSC_GENOMES_URL = f"{UCSC_API_BASE}list/ucscGenomes"
UCSC_CHROMOSOMES_URL = f"{UCSC_API_BASE}list/chromosomes"
UCSC_SEQUENCE_URL = f"{UCSC_API_BASE}getData/sequence"

EUTILS_BASE = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils/"
EUTILS_ESEARCH_URL = f"{EUTILS_BASE}esearch.fcgi"
EUTILS_ESUMMARY_URL = f"{EUTILS_BASE}esummary.fcgi"

GENE_SEARCH_URL = "https://clinicaltables.nlm.nih.gov/api/ncbi_genes/v3/search"
GENE_SEARCH_FIELDS = "chromosome,Symbol,description,map_location,type_of_gene,GenomicInfo,GeneID"

# Networking defaults
DEFAULT_HOST = "0.0.0.0"  # noqa: S104
DEFAULT_PORT = 8000
DEFAULT_ISSUER_URL = "http://localhost:8000"
DEFAULT_RESOURCE_SERVER_URL = "http://localhost:8000"
DEFAULT_TRANSPORT = "stdio"
DEFAULT_LOG_LEVEL = "INFO"
# None disables the httpx timeout; upstream calls are single-shot
DEFAULT_REQUEST_TIMEOUT: float | None = None

# Normalization limits
DEFAULT_ORGANISM = "Other"
MAX_GENE_SEARCH_RESULTS = 30
MIN_GENE_RECORD_FIELDS = 7
INITIAL_RANGE_MAX_SPAN = 10_000
CLINVAR_MAX_RESULTS = 20
LEGACY_GENOME_BUILD = "hg19"
LEGACY_POSITION_FIELD = "chrpos37"
CURRENT_POSITION_FIELD = "chrpos38"
UNKNOWN = "Unknown"
EXCLUDED_CHROMOSOME_MARKERS = ("_", "Un", "random")

# Error messages surfaced by the never-raising fetchers
NO_SEQUENCE_ERROR = "No sequence returned"
SEQUENCE_INTERNAL_ERROR = "Internal error in fetch gene sequence"

# Auth and session policy
DEFAULT_DATABASE_URL = "sqlite:///genomeapi.db"
DEFAULT_SESSION_EXPIRES_IN_SECONDS = 60 * 60 * 24 * 7  # 7 days
DEFAULT_SESSION_UPDATE_AGE_SECONDS = 60 * 60 * 24  # 1 day
AUTH_CODE_LIFETIME_SECONDS = 300
# Email/password sign-in, passed through to the identity provider
DEFAULT_EMAIL_PASSWORD_ENABLED = True
DEFAULT_REQUIRE_EMAIL_VERIFICATION = True

# Rate limiting
DEFAULT_RATE_LIMIT_MAX_REQUESTS = 100
DEFAULT_RATE_LIMIT_WINDOW_SECONDS = 10
