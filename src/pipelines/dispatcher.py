"""Pipeline dispatch.

This module validates launch parameters, resolves one variant from the
dispatch table, provisions the output channel, and runs the stream job.
All collaborators are passed in so no broker connection or execution
environment is shared across runs.
"""

from __future__ import annotations

from broker.channel_admin import ChannelAdmin
from broker.kafka_connector import KafkaConnector
from broker.sink_writer import KafkaSinkWriter
from broker.source_reader import KafkaSourceReader
from core.config import PrepstreamConfig
from core.errors import DispatchErrorKind, PrepstreamDispatchError
from core.logging_config import get_logger
from core.types import ChannelProvisionOutcome, DispatchResult, PipelineRequest
from pipelines.contracts import ChannelProvisioner, SinkWriter, SourceReader
from pipelines.stream_environment import LocalStreamEnvironment, StreamJob
from pipelines.variant_registry import VariantRegistry
from pipelines.variants import PipelineVariant

_LOGGER = get_logger(__name__)


class PipelineDispatcher:
    """Selects and runs one pipeline variant per call."""

    def __init__(
        self,
        config: PrepstreamConfig,
        channel_admin: ChannelProvisioner,
        reader: SourceReader,
        writer: SinkWriter,
        environment: LocalStreamEnvironment,
        registry: VariantRegistry | None = None,
    ) -> None:
        self._config = config
        self._channel_admin = channel_admin
        self._reader = reader
        self._writer = writer
        self._environment = environment
        self._registry = registry or VariantRegistry()

    def dispatch(
        self,
        data_source: str | None,
        processing_type: str | None,
        output_channel: str | None,
    ) -> DispatchResult:
        """Run the pipeline selected by a data source and processing type.

        Side effects happen in a fixed order: validation, variant
        resolution, output channel provisioning, then pipeline execution.
        Nothing touches the broker until the first two steps succeed.

        Args:
            data_source: Origin of the raw data, e.g. ``slacktext``.
            processing_type: Kind of labeling, e.g. ``channel``.
            output_channel: Topic to provision and write labeled records to.

        Returns:
            Summary of the finished run.

        Raises:
            PrepstreamDispatchError: Tagged with the failure kind; provisioning
                and pipeline failures chain the original exception.
        """
        request = PipelineRequest.validated(data_source, processing_type, output_channel)
        variant = self._resolve_variant(request)
        request = request.with_input_channel(variant.input_channel)
        _LOGGER.info(
            "variant_resolved",
            data_source=request.data_source,
            processing_type=request.processing_type,
            variant=variant.name,
            input_channel=request.input_channel,
            output_channel=request.output_channel,
        )
        outcome = self._provision_output_channel(variant, request)
        job = StreamJob(
            name=variant.name,
            input_channel=variant.input_channel,
            output_channel=request.output_channel,
            reader=self._reader,
            transformer=variant.build_transformer(),
            writer=self._writer,
        )
        try:
            job_result = self._environment.execute(job)
        except Exception as error:
            raise PrepstreamDispatchError(
                DispatchErrorKind.PIPELINE_FAILED,
                f"Pipeline {variant.name} failed while streaming from "
                f"'{variant.input_channel}' to '{request.output_channel}': {error}",
                data_source=request.data_source,
                processing_type=request.processing_type,
            ) from error
        return DispatchResult(
            request=request,
            variant_name=variant.name,
            provisioning_outcome=outcome,
            job_result=job_result,
        )

    def _resolve_variant(self, request: PipelineRequest) -> PipelineVariant:
        factory = self._registry.resolve(request.data_source, request.processing_type)
        return factory(self._config)

    def _provision_output_channel(
        self,
        variant: PipelineVariant,
        request: PipelineRequest,
    ) -> ChannelProvisionOutcome | None:
        spec = variant.provisioning
        if spec is None:
            return None
        try:
            outcome = self._channel_admin.create_channel(request.output_channel, spec)
        except Exception as error:
            raise PrepstreamDispatchError(
                DispatchErrorKind.PROVISIONING_FAILED,
                f"Provisioning output channel '{request.output_channel}' failed: {error}",
                data_source=request.data_source,
                processing_type=request.processing_type,
            ) from error
        if outcome is ChannelProvisionOutcome.ALREADY_EXISTS:
            _LOGGER.warning(
                "output_channel_already_exists",
                channel=request.output_channel,
                variant=variant.name,
            )
        return outcome


def build_dispatcher(config: PrepstreamConfig) -> PipelineDispatcher:
    """Wire a dispatcher to Kafka-backed collaborators.

    Args:
        config: Runtime configuration.

    Returns:
        Dispatcher with fresh broker adapters and a local environment.
    """
    connector = KafkaConnector(config)
    return PipelineDispatcher(
        config=config,
        channel_admin=ChannelAdmin(connector.create_admin_client),
        reader=KafkaSourceReader(connector.create_consumer),
        writer=KafkaSinkWriter(connector.create_producer, config.send_timeout_seconds),
        environment=LocalStreamEnvironment(config.progress_log_interval),
    )
