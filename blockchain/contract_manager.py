"""
Contract Manager
Interactions with a deployed Counter contract
"""

from typing import List, Optional

from loguru import logger

from .chain_client import ChainClient, chain_errors


class CounterContract:
    """
    Wraps a deployed Counter: increment() / getCount() / CountIncremented events
    """

    def __init__(self, client: ChainClient, address: str, abi: List[dict]):
        """
        Initialize Counter wrapper

        Args:
            client: Chain client used for calls and signing
            address: Deployed contract address
            abi: Counter ABI
        """
        self.client = client
        self.contract = client.contract_at(address, abi)
        self.address = self.contract.address

    def get_count(self) -> int:
        """Current counter value"""
        with chain_errors("reading getCount()"):
            return self.contract.functions.getCount().call()

    def increment(self, timeout: float = 120, poll_latency: float = 0.1) -> Optional[int]:
        """
        Send increment() and wait for it to be mined

        Returns:
            New count reported by the CountIncremented event, or None if no event was found
        """
        receipt = self.client.transact(
            self.contract.functions.increment(),
            timeout=timeout,
            poll_latency=poll_latency
        )

        with chain_errors("decoding CountIncremented"):
            events = self.contract.events.CountIncremented().process_receipt(receipt)

        if not events:
            logger.warning("increment() mined without a CountIncremented event")
            return None

        new_count = events[-1]['args']['newCount']
        logger.info(f"Counter incremented to {new_count}")
        return new_count
