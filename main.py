#!/usr/bin/env python3

##############################################
#                                            #
#       ADAPTIVE BACKTRACKING REASONER       #
#                                            #
##############################################

from dotenv import load_dotenv
from backtracking.reasoner.prebuilt import LiteLLMBacktrackingReasoner
from backtracking.signature.signature import Signature
from utils.cli import read_question, print_result
from utils.load_config import load_config

from utils.logger import get_logger, init_logger
logger = get_logger(__name__)

QA_SIGNATURE = Signature.define("question -> answer")


def main() -> None:
    init_logger("config.json")
    load_dotenv()

    reasoner = LiteLLMBacktrackingReasoner.from_config(load_config())
    # Or assemble your own reasoner as follows:
    # reasoner = AdaptiveBacktrackingReasoner(
    #     llm = LiteLLM(model="claude-sonnet-4"),
    #     config = BacktrackingConfig(confidence_threshold=0.6, constraint_functions=[...]),
    #     policy = ThresholdBacktrackPolicy(0.6),
    # )
    logger.info("🤖 Reasoner started. Ask a question to get started…")

    while True:
        question = None
        try:
            question = read_question()
            if not question:  # Skip empty inputs
                continue

            prediction = reasoner.run(QA_SIGNATURE, {"question": question})
            print_result(prediction)

        except KeyboardInterrupt:
            logger.info("🤖 Bye!")
            break

        except Exception as exc:
            logger.exception("run_failed", question=question, error=str(exc))


if __name__ == "__main__":
    main()
