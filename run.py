import uvicorn

from cafe_gacha.utils.logging import setup_logging

if __name__ == "__main__":
    setup_logging("backend.log")
    uvicorn.run("cafe_gacha.main:app", host="127.0.0.1", port=8080, log_config=None, log_level=None)
