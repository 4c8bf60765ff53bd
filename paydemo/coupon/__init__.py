"""Coupon aggregate, repository, use case and request handler."""