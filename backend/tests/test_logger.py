from loguru import logger

from podrun.core.logger import session_logger, setup_logger


def test_records_carry_user_and_run_context():
    setup_logger(level="WARNING")
    seen = []
    sink = logger.add(seen.append, format="{extra[user_id]} {extra[session_id]} {message}", level="INFO")
    try:
        logger.info("outside")
        session_logger("run-1", "user-1").info("bound")
        with logger.contextualize(user_id="user-2", session_id="run-2"):
            logger.info("request")
    finally:
        logger.remove(sink)

    assert [line.strip() for line in seen] == [
        "- - outside",
        "user-1 run-1 bound",
        "user-2 run-2 request",
    ]
