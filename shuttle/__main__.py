import uvicorn

from shuttle.core.config import settings


def run():
    uvicorn.run(
        "shuttle.main:app",
        host=settings.HOST,
        port=settings.PORT,
        proxy_headers=True,
        forwarded_allow_ips=settings.FORWARDED_ALLOW_IPS,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
