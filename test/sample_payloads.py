import copy

SAMPLE_WEBHOOK = {
    "version": "1.0",
    "subject": "[checkout-api] NullPointerException",
    "group_info": {
        "project_id": "proj-a",
        "detail_link": "https://errors.example.com/groups/42",
    },
    "exception_info": {
        "type": "NullPointerException",
        "message": "Cannot read field 'total' of null",
    },
    "event_info": {
        "log_message": "checkout failed",
        "request_method": "POST",
        "request_url": "https://shop.example.com/checkout",
        "referrer": "https://shop.example.com/cart",
        "user_agent": "Mozilla/5.0",
        "service": "checkout-api",
        "version": "2024.05.1",
        "response_status": "500",
    },
}


def sample_webhook(**overrides):
    data = copy.deepcopy(SAMPLE_WEBHOOK)
    for key, value in overrides.items():
        data[key] = value
    return data
