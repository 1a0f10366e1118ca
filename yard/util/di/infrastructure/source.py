"""Feed source provider combining every transaction ledger."""

from dishka import Scope, provide

from yard.domain.repository import (
    AgentTransactionSource,
    MemberTransactionSource,
    TransactionSource,
)
from yard.domain.value import TransactionKind
from yard.util.di.base import ProviderBase


class SourceAggregatorProvider(ProviderBase):
    """Provider that aggregates the member and agent sources into a dictionary."""

    scope = Scope.REQUEST

    @provide
    def get_sources(
        self,
        member_source: MemberTransactionSource,
        agent_source: AgentTransactionSource,
    ) -> dict[TransactionKind, TransactionSource]:
        """Provide every transaction source keyed by the ledger it reads.

        Args:
            member_source: Member ledger (specific type)
            agent_source: Agent ledger (specific type)
        """
        return {
            TransactionKind.MEMBER: member_source,
            TransactionKind.AGENT: agent_source,
        }
