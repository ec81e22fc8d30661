from enum import Enum


class VehicleClass(str, Enum):
    PREMIER_SEDAN = "premier-sedan"
    LUXURY_SEDAN = "luxury-sedan"
    SUV = "suv"
    VAN_7_SEATER = "van-7-seater"
    VAN_14_SEATER = "van-14-seater"
    MINIBUS = "minibus"

    def __str__(self):
        return self.value


class TripType(str, Enum):
    SINGLE = "single"
    RETURN = "return"

    def __str__(self):
        return self.value


class SameDayReturn(str, Enum):
    YES = "yes"
    NO = "no"

    def __str__(self):
        return self.value


class GeocodeStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    PROVIDER_UNAVAILABLE = "provider_unavailable"

    def __str__(self):
        return self.value


class ErrorKind(str, Enum):
    ADDRESS_NOT_FOUND = "address_not_found"
    ROUTE_ERROR = "route_error"
    AUTH_CONFIG_ERROR = "auth_config_error"
    TRANSPORT_ERROR = "transport_error"
    UNKNOWN_QUOTE_ERROR = "unknown_quote_error"
    VALIDATION_ERROR = "validation_error"
    CONFIG_ERROR = "config_error"
    NOTIFICATION_ERROR = "notification_error"
    SERVICE_NOT_CONFIGURED = "service_not_configured"
    RATE_LIMITED = "rate_limited"

    def __str__(self):
        return self.value
