"""
Business Logic Layer Module.

Request validation, the city gate and operation translation, and the device
pipeline that runs them in order.
"""
