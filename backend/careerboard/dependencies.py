from fastapi import Request

from careerboard.services.listing_query import ListQuery


async def listing_query(request: Request) -> ListQuery:
    # Read raw params so malformed page/sort values are corrected, not rejected
    return ListQuery.from_params(request.query_params)
