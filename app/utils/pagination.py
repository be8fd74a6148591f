import math

from sqlalchemy.orm import Query


def paginate(query: Query, page: int, limit: int):
    """ (items, total_count, total_pages) 반환. page 는 1부터 """
    total_count = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    total_pages = math.ceil(total_count / limit) if limit else 0
    return items, total_count, total_pages
