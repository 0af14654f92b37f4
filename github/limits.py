'''
limits for github-api

see: https://docs.github.com/en/rest/using-the-rest-api/rate-limits-for-the-rest-api
'''

# maximum value accepted for `per_page` by list-endpoints
per_page = 100

# primary rate-limits (requests per hour)
unauthenticated_requests = 60

# below this amount of remaining requests, a warning is emitted
remaining_requests_warn_threshold = 10


def clamp_page_size(
    value: int,
    /,
    limit: int=per_page,
) -> int:
    if value < 1:
        raise ValueError(f'page-size must be positive: {value=}')
    return min(value, limit)
