from bizsearch.schemas.search import SearchQuery

RECORD_FIELDS = ("name", "industry", "phone", "address", "email", "website")

_PROMPT_TEMPLATE = """\
Find a list of real businesses in {region} matching: {criteria}.
Provide details for at least {min_results} businesses if possible.

Start with a short overview of these businesses in the area, written for a
general reader. Then, for each business, include:
1. Name
2. Industry
3. Phone (with local prefix)
4. Full Address
5. Email
6. Website

Return the data as a JSON array in a single block, after the overview:
```json
[
  {{ "name": "...", "industry": "...", "phone": "...", "address": "...", "email": "...", "website": "..." }}
]
```
Use null for an email or website you cannot find.
"""


def describe_criteria(industry: str, location: str) -> str:
    parts = []
    if industry:
        parts.append(f'industry: "{industry}"')
    if location:
        parts.append(f'location: "{location}"')
    return " and ".join(parts)


def build_prompt(
    query: SearchQuery,
    region: str = "Malaysia",
    min_results: int = 15,
) -> str:
    criteria = describe_criteria(query.industry, query.location)
    if not criteria:
        raise ValueError("industry or location is required")
    return _PROMPT_TEMPLATE.format(
        region=region, criteria=criteria, min_results=min_results
    )
