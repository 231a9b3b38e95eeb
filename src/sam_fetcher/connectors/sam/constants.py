"""SAM.gov Opportunities API field names and endpoints."""

SEARCH_URL = "https://api.sam.gov/opportunities/v2/search"

# Identifier aliases, tried in order
NOTICE_ID_KEYS = ("noticeId", "noticeID", "id")

# Wire name -> candidate source keys, tried in order
FIELD_FALLBACKS: dict[str, tuple[str, ...]] = {
    "title": ("title",),
    "solicitationNumber": ("solicitationNumber",),
    "type": ("type", "baseType"),
    "postedDate": ("postedDate",),
    "responseDeadline": ("responseDeadLine", "responseDeadline"),
    "setAsideCode": ("typeOfSetAside", "setAsideCode"),
    "naicsCode": ("naicsCode",),
    "classificationCode": ("classificationCode",),
    "uiLink": ("uiLink",),
}

# Response keys that may hold the page of results, tried in order
RESULT_KEYS = ("opportunitiesData", "opportunities", "results")

# Only active notices are ever requested
STATUS_ACTIVE = "active"

# Max characters of an error body kept for diagnostics
ERROR_BODY_LIMIT = 500
