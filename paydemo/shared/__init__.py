"""Money, domain events, auth context and request/response helpers shared by all parts."""