"""Known statistics: their unit and whether they are counters or gauges.

Metric names are looked up when a diff is reported. Names missing from the
tables resolve to the ``"?"`` row; an unknown value statistic is therefore
reported as a counter.
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

UNKNOWN = "?"

COUNTER = "counter"
GAUGE = "gauge"

UNIT_SUFFIXES: dict[str, str] = {
    "microseconds": "us",
    "milliseconds": "ms",
    "operations": "ops",
    "bytes": "bytes",
    "files": "files",
    "tasks": "tasks",
    "requests": "reqs",
    "rows": "rows",
    "threads": "threads",
    "connections": "conns",
    "transactions": "txns",
    UNKNOWN: UNKNOWN,
}


@dataclass(frozen=True)
class StatisticDetails:
    """Display details of one named statistic.

    Attributes:
        unit: Full unit name, e.g. "microseconds".
        unit_suffix: Abbreviated unit for display, e.g. "us".
        stat_type: "counter" or "gauge".
    """

    unit: str
    unit_suffix: str
    stat_type: str

    @property
    def is_gauge(self) -> bool:
        return self.stat_type == GAUGE


def _suffix(unit: str) -> str:
    suffix = UNIT_SUFFIXES.get(unit)
    if suffix is None:
        logger.info("no suffix known for unit %s", unit)
        return UNKNOWN
    return suffix


class StatisticsTable:
    """Lookup table from statistic name to ``StatisticDetails``."""

    ROWS: list[tuple[str, str, str]] = []

    def __init__(self, rows: list[tuple[str, str, str]] | None = None) -> None:
        self._details: dict[str, StatisticDetails] = {
            UNKNOWN: StatisticDetails(UNKNOWN, UNKNOWN, UNKNOWN)
        }
        for name, unit, stat_type in self.ROWS if rows is None else rows:
            self.insert(name, unit, stat_type)

    def insert(self, name: str, unit: str, stat_type: str) -> None:
        """Add or replace a statistic."""
        self._details[name] = StatisticDetails(unit, _suffix(unit), stat_type)

    def lookup(self, name: str) -> StatisticDetails:
        """Return the details for ``name``, or the unknown row."""
        details = self._details.get(name)
        if details is None:
            logger.debug("statistic not found: %s", name)
            return self._details[UNKNOWN]
        return details

    def __contains__(self, name: object) -> bool:
        return name in self._details

    def __len__(self) -> int:
        return len(self._details)


_VALUE_ROWS = [
    ("block_cache_single_touch_usage", "bytes", GAUGE),
    ("block_cache_multi_touch_usage", "bytes", GAUGE),
    ("block_cache_usage", "bytes", GAUGE),
    ("cpu_stime", "milliseconds", COUNTER),
    ("cpu_utime", "milliseconds", COUNTER),
    ("generic_current_allocated_bytes", "bytes", GAUGE),
    ("generic_heap_size", "bytes", GAUGE),
    ("hybrid_clock_error", "microseconds", GAUGE),
    ("hybrid_clock_hybrid_time", "microseconds", GAUGE),
    ("in_progress_ops", "operations", GAUGE),
    ("involuntary_context_switches", "operations", COUNTER),
    ("log_bytes_logged", "bytes", COUNTER),
    ("log_wal_size", "bytes", GAUGE),
    ("mem_tracker", "bytes", GAUGE),
    ("rocksdb_block_cache_hit", "operations", COUNTER),
    ("rocksdb_block_cache_miss", "operations", COUNTER),
    ("rocksdb_bytes_read", "bytes", COUNTER),
    ("rocksdb_bytes_written", "bytes", COUNTER),
    ("rocksdb_current_version_sst_files_size", "bytes", GAUGE),
    ("rocksdb_number_db_next", "operations", COUNTER),
    ("rocksdb_number_db_seek", "operations", COUNTER),
    ("rows_inserted", "rows", COUNTER),
    ("rpc_connections_alive", "connections", GAUGE),
    ("rpc_inbound_calls_alive", "requests", GAUGE),
    ("rpc_inbound_calls_created", "requests", COUNTER),
    ("rpc_outbound_calls_alive", "requests", GAUGE),
    ("rpc_outbound_calls_created", "requests", COUNTER),
    ("threads_running", "threads", GAUGE),
    ("threads_started", "threads", COUNTER),
    ("ts_live_tablet_peers", "?", GAUGE),
    ("voluntary_context_switches", "operations", COUNTER),
]

# Latency histograms, all in microseconds.
_COUNTSUM_MICROSECONDS = (
    "AddServer_ChangeConfig_Attempt",
    "AddServer_ChangeConfig_Task",
    "Create_Tablet_Attempt",
    "Create_Tablet_Task",
    "Delete_Tablet_Attempt",
    "Delete_Tablet_Task",
    "Flush_Tablets_Attempt",
    "Flush_Tablets_Task",
    "Hinted_Leader_Start_Election_Attempt",
    "Hinted_Leader_Start_Election_Task",
    "Stepdown_Leader_Attempt",
    "Stepdown_Leader_Task",
    "Truncate_Tablet_Attempt",
    "Truncate_Tablet_Task",
    "admin_triggered_compaction_pool_queue_time_us",
    "admin_triggered_compaction_pool_run_time_us",
    "dns_resolve_latency_during_init_proxy",
    "dns_resolve_latency_during_sys_catalog_setup",
    "dns_resolve_latency_during_update_raft_config",
    "full_compaction_pool_queue_time_us",
    "full_compaction_pool_run_time_us",
    "handler_latency_outbound_call_queue_time",
    "handler_latency_outbound_call_send_time",
    "handler_latency_outbound_call_time_to_response",
    "handler_latency_outbound_transfer",
    "handler_latency_yb_cdc_CDCService_BootstrapProducer",
    "handler_latency_yb_cdc_CDCService_CheckReplicationDrain",
    "handler_latency_yb_cdc_CDCService_CreateCDCStream",
    "handler_latency_yb_cdc_CDCService_DeleteCDCStream",
    "handler_latency_yb_cdc_CDCService_GetCDCDBStreamInfo",
    "handler_latency_yb_cdc_CDCService_GetChanges",
    "handler_latency_yb_cdc_CDCService_GetCheckpoint",
    "handler_latency_yb_cdc_CDCService_GetLastOpId",
    "handler_latency_yb_cdc_CDCService_GetLatestEntryOpId",
    "handler_latency_yb_cdc_CDCService_GetTabletListToPollForCDC",
    "handler_latency_yb_cdc_CDCService_IsBootstrapRequired",
    "handler_latency_yb_cdc_CDCService_ListTablets",
    "handler_latency_yb_cdc_CDCService_SetCDCCheckpoint",
    "handler_latency_yb_cdc_CDCService_UpdateCdcReplicatedIndex",
    "handler_latency_yb_client_read_local",
    "handler_latency_yb_client_read_remote",
    "handler_latency_yb_client_time_to_send",
    "handler_latency_yb_client_write_local",
    "handler_latency_yb_client_write_remote",
    "handler_latency_yb_consensus_ConsensusService_ChangeConfig",
    "handler_latency_yb_consensus_ConsensusService_GetConsensusState",
    "handler_latency_yb_consensus_ConsensusService_GetLastOpId",
    "handler_latency_yb_consensus_ConsensusService_GetNodeInstance",
    "handler_latency_yb_consensus_ConsensusService_LeaderElectionLost",
    "handler_latency_yb_consensus_ConsensusService_LeaderStepDown",
    "handler_latency_yb_consensus_ConsensusService_MultiRaftUpdateConsensus",
    "handler_latency_yb_consensus_ConsensusService_RequestConsensusVote",
    "handler_latency_yb_consensus_ConsensusService_RunLeaderElection",
    "handler_latency_yb_consensus_ConsensusService_StartRemoteBootstrap",
    "handler_latency_yb_consensus_ConsensusService_UnregisterLogAnchor",
    "handler_latency_yb_consensus_ConsensusService_UnsafeChangeConfig",
    "handler_latency_yb_consensus_ConsensusService_UpdateConsensus",
    "handler_latency_yb_cqlserver_CQLServerService_Any",
    "handler_latency_yb_cqlserver_CQLServerService_ExecuteRequest",
    "handler_latency_yb_cqlserver_CQLServerService_GetProcessor",
    "handler_latency_yb_cqlserver_CQLServerService_ParseRequest",
    "handler_latency_yb_cqlserver_CQLServerService_ProcessRequest",
    "handler_latency_yb_cqlserver_CQLServerService_QueueResponse",
    "handler_latency_yb_cqlserver_SQLProcessor_AnalyzeRequest",
    "handler_latency_yb_cqlserver_SQLProcessor_DeleteStmt",
    "handler_latency_yb_cqlserver_SQLProcessor_ExecuteRequest",
    "handler_latency_yb_cqlserver_SQLProcessor_InsertStmt",
    "handler_latency_yb_cqlserver_SQLProcessor_OtherStmts",
    "handler_latency_yb_cqlserver_SQLProcessor_ParseRequest",
    "handler_latency_yb_cqlserver_SQLProcessor_SelectStmt",
    "handler_latency_yb_cqlserver_SQLProcessor_Transaction",
    "handler_latency_yb_cqlserver_SQLProcessor_UpdateStmt",
    "handler_latency_yb_cqlserver_SQLProcessor_UseStmt",
    "handler_latency_yb_master_MasterAdmin_AddTransactionStatusTablet",
    "handler_latency_yb_master_MasterAdmin_CheckIfPitrActive",
    "handler_latency_yb_master_MasterAdmin_CompactSysCatalog",
    "handler_latency_yb_master_MasterAdmin_CreateTransactionStatusTable",
    "handler_latency_yb_master_MasterAdmin_DdlLog",
    "handler_latency_yb_master_MasterAdmin_DeleteNotServingTablet",
    "handler_latency_yb_master_MasterAdmin_DisableTabletSplitting",
    "handler_latency_yb_master_MasterAdmin_FlushSysCatalog",
    "handler_latency_yb_master_MasterAdmin_FlushTables",
    "handler_latency_yb_master_MasterAdmin_IsFlushTablesDone",
    "handler_latency_yb_master_MasterAdmin_IsInitDbDone",
    "handler_latency_yb_master_MasterAdmin_IsTabletSplittingComplete",
    "handler_latency_yb_master_MasterAdmin_SplitTablet",
    "handler_latency_yb_master_MasterBackupService_CreateSnapshot",
    "handler_latency_yb_master_MasterBackupService_CreateSnapshotSchedule",
    "handler_latency_yb_master_MasterBackupService_DeleteSnapshot",
    "handler_latency_yb_master_MasterBackupService_DeleteSnapshotSchedule",
    "handler_latency_yb_master_MasterBackupService_ImportSnapshotMeta",
    "handler_latency_yb_master_MasterBackupService_ListSnapshotRestorations",
    "handler_latency_yb_master_MasterBackupService_ListSnapshotSchedules",
    "handler_latency_yb_master_MasterBackupService_ListSnapshots",
    "handler_latency_yb_master_MasterBackupService_RestoreSnapshot",
    "handler_latency_yb_master_MasterBackup_CreateSnapshot",
    "handler_latency_yb_master_MasterBackup_CreateSnapshotSchedule",
    "handler_latency_yb_master_MasterBackup_DeleteSnapshot",
    "handler_latency_yb_master_MasterBackup_DeleteSnapshotSchedule",
    "handler_latency_yb_master_MasterBackup_EditSnapshotSchedule",
    "handler_latency_yb_master_MasterBackup_ImportSnapshotMeta",
    "handler_latency_yb_master_MasterBackup_ListSnapshotRestorations",
    "handler_latency_yb_master_MasterBackup_ListSnapshotSchedules",
    "handler_latency_yb_master_MasterBackup_ListSnapshots",
    "handler_latency_yb_master_MasterBackup_RestoreSnapshot",
    "handler_latency_yb_master_MasterBackup_RestoreSnapshotSchedule",
    "handler_latency_yb_master_MasterClient_GetTableLocations",
    "handler_latency_yb_master_MasterClient_GetTabletLocations",
    "handler_latency_yb_master_MasterClient_GetTransactionStatusTablets",
    "handler_latency_yb_master_MasterClient_GetYsqlCatalogConfig",
    "handler_latency_yb_master_MasterClient_RedisConfigGet",
    "handler_latency_yb_master_MasterClient_RedisConfigSet",
    "handler_latency_yb_master_MasterClient_ReservePgsqlOids",
    "handler_latency_yb_master_MasterCluster_AreLeadersOnPreferredOnly",
    "handler_latency_yb_master_MasterCluster_ChangeLoadBalancerState",
    "handler_latency_yb_master_MasterCluster_ChangeMasterClusterConfig",
    "handler_latency_yb_master_MasterCluster_DumpState",
    "handler_latency_yb_master_MasterCluster_GetAutoFlagsConfig",
    "handler_latency_yb_master_MasterCluster_GetLeaderBlacklistCompletion",
    "handler_latency_yb_master_MasterCluster_GetLoadBalancerState",
    "handler_latency_yb_master_MasterCluster_GetLoadMoveCompletion",
    "handler_latency_yb_master_MasterCluster_GetMasterClusterConfig",
    "handler_latency_yb_master_MasterCluster_GetMasterRegistration",
    "handler_latency_yb_master_MasterCluster_IsLoadBalanced",
    "handler_latency_yb_master_MasterCluster_IsLoadBalancerIdle",
    "handler_latency_yb_master_MasterCluster_IsMasterLeaderServiceReady",
    "handler_latency_yb_master_MasterCluster_ListLiveTabletServers",
    "handler_latency_yb_master_MasterCluster_ListMasterRaftPeers",
    "handler_latency_yb_master_MasterCluster_ListMasters",
    "handler_latency_yb_master_MasterCluster_ListTabletServers",
    "handler_latency_yb_master_MasterCluster_PromoteAutoFlags",
    "handler_latency_yb_master_MasterCluster_RemovedMasterUpdate",
    "handler_latency_yb_master_MasterCluster_SetPreferredZones",
    "handler_latency_yb_master_MasterDcl_AlterRole",
    "handler_latency_yb_master_MasterDcl_CreateRole",
    "handler_latency_yb_master_MasterDcl_DeleteRole",
    "handler_latency_yb_master_MasterDcl_GetPermissions",
    "handler_latency_yb_master_MasterDcl_GrantRevokePermission",
    "handler_latency_yb_master_MasterDcl_GrantRevokeRole",
    "handler_latency_yb_master_MasterDdl_AlterNamespace",
    "handler_latency_yb_master_MasterDdl_AlterTable",
    "handler_latency_yb_master_MasterDdl_BackfillIndex",
    "handler_latency_yb_master_MasterDdl_CreateNamespace",
    "handler_latency_yb_master_MasterDdl_CreateTable",
    "handler_latency_yb_master_MasterDdl_CreateTablegroup",
    "handler_latency_yb_master_MasterDdl_CreateUDType",
    "handler_latency_yb_master_MasterDdl_DeleteNamespace",
    "handler_latency_yb_master_MasterDdl_DeleteTable",
    "handler_latency_yb_master_MasterDdl_DeleteTablegroup",
    "handler_latency_yb_master_MasterDdl_DeleteUDType",
    "handler_latency_yb_master_MasterDdl_GetBackfillJobs",
    "handler_latency_yb_master_MasterDdl_GetColocatedTabletSchema",
    "handler_latency_yb_master_MasterDdl_GetNamespaceInfo",
    "handler_latency_yb_master_MasterDdl_GetTableDiskSize",
    "handler_latency_yb_master_MasterDdl_GetTableSchema",
    "handler_latency_yb_master_MasterDdl_GetTablegroupSchema",
    "handler_latency_yb_master_MasterDdl_GetUDTypeInfo",
    "handler_latency_yb_master_MasterDdl_IsAlterTableDone",
    "handler_latency_yb_master_MasterDdl_IsCreateNamespaceDone",
    "handler_latency_yb_master_MasterDdl_IsCreateTableDone",
    "handler_latency_yb_master_MasterDdl_IsDeleteNamespaceDone",
    "handler_latency_yb_master_MasterDdl_IsDeleteTableDone",
    "handler_latency_yb_master_MasterDdl_IsTruncateTableDone",
    "handler_latency_yb_master_MasterDdl_LaunchBackfillIndexForTable",
    "handler_latency_yb_master_MasterDdl_ListNamespaces",
    "handler_latency_yb_master_MasterDdl_ListTablegroups",
    "handler_latency_yb_master_MasterDdl_ListTables",
    "handler_latency_yb_master_MasterDdl_ListUDTypes",
    "handler_latency_yb_master_MasterDdl_TruncateTable",
    "handler_latency_yb_master_MasterEncryption_AddUniverseKeys",
    "handler_latency_yb_master_MasterEncryption_ChangeEncryptionInfo",
    "handler_latency_yb_master_MasterEncryption_GetUniverseKeyRegistry",
    "handler_latency_yb_master_MasterEncryption_HasUniverseKeyInMemory",
    "handler_latency_yb_master_MasterEncryption_IsEncryptionEnabled",
    "handler_latency_yb_master_MasterHeartbeat_TSHeartbeat",
    "handler_latency_yb_master_MasterReplication_AlterUniverseReplication",
    "handler_latency_yb_master_MasterReplication_ChangeXClusterRole",
    "handler_latency_yb_master_MasterReplication_CreateCDCStream",
    "handler_latency_yb_master_MasterReplication_DeleteCDCStream",
    "handler_latency_yb_master_MasterReplication_DeleteUniverseReplication",
    "handler_latency_yb_master_MasterReplication_GetCDCDBStreamInfo",
    "handler_latency_yb_master_MasterReplication_GetCDCStream",
    "handler_latency_yb_master_MasterReplication_GetReplicationStatus",
    "handler_latency_yb_master_MasterReplication_GetTableSchemaFromSysCatalog",
    "handler_latency_yb_master_MasterReplication_GetUDTypeMetadata",
    "handler_latency_yb_master_MasterReplication_GetUniverseReplication",
    "handler_latency_yb_master_MasterReplication_GetXClusterEstimatedDataLoss",
    "handler_latency_yb_master_MasterReplication_GetXClusterSafeTime",
    "handler_latency_yb_master_MasterReplication_IsBootstrapRequired",
    "handler_latency_yb_master_MasterReplication_IsSetupUniverseReplicationDone",
    "handler_latency_yb_master_MasterReplication_ListCDCStreams",
    "handler_latency_yb_master_MasterReplication_SetUniverseReplicationEnabled",
    "handler_latency_yb_master_MasterReplication_SetupNSUniverseReplication",
    "handler_latency_yb_master_MasterReplication_SetupUniverseReplication",
    "handler_latency_yb_master_MasterReplication_UpdateCDCStream",
    "handler_latency_yb_master_MasterReplication_UpdateConsumerOnProducerMetadata",
    "handler_latency_yb_master_MasterReplication_UpdateConsumerOnProducerSplit",
    "handler_latency_yb_master_MasterReplication_ValidateReplicationInfo",
    "handler_latency_yb_master_MasterReplication_WaitForReplicationDrain",
    "handler_latency_yb_master_MasterService_AddUniverseKeys",
    "handler_latency_yb_master_MasterService_AlterNamespace",
    "handler_latency_yb_master_MasterService_AlterRole",
    "handler_latency_yb_master_MasterService_AlterTable",
    "handler_latency_yb_master_MasterService_AlterUniverseReplication",
    "handler_latency_yb_master_MasterService_AreLeaderOnPreferredOnly",
    "handler_latency_yb_master_MasterService_BackfillIndex",
    "handler_latency_yb_master_MasterService_ChangeEncryptionInfo",
    "handler_latency_yb_master_MasterService_ChangeLoadBalancerState",
    "handler_latency_yb_master_MasterService_ChangeMasterClusterConfig",
    "handler_latency_yb_master_MasterService_CreateCDCStream",
    "handler_latency_yb_master_MasterService_CreateNamespace",
    "handler_latency_yb_master_MasterService_CreateRole",
    "handler_latency_yb_master_MasterService_CreateTable",
    "handler_latency_yb_master_MasterService_CreateTablegroup",
    "handler_latency_yb_master_MasterService_CreateTransactionStatusTable",
    "handler_latency_yb_master_MasterService_CreateUDType",
    "handler_latency_yb_master_MasterService_DdlLog",
    "handler_latency_yb_master_MasterService_DeleteCDCStream",
    "handler_latency_yb_master_MasterService_DeleteNamespace",
    "handler_latency_yb_master_MasterService_DeleteNotServingTablet",
    "handler_latency_yb_master_MasterService_DeleteRole",
    "handler_latency_yb_master_MasterService_DeleteTable",
    "handler_latency_yb_master_MasterService_DeleteTablegroup",
    "handler_latency_yb_master_MasterService_DeleteUniverseReplication",
    "handler_latency_yb_master_MasterService_DumpState",
    "handler_latency_yb_master_MasterService_FlushCoverage",
    "handler_latency_yb_master_MasterService_FlushTables",
    "handler_latency_yb_master_MasterService_GetBackfillJobs",
    "handler_latency_yb_master_MasterService_GetCDCStream",
    "handler_latency_yb_master_MasterService_GetColocatedTabletSchema",
    "handler_latency_yb_master_MasterService_GetLeaderBlacklistCompletion",
    "handler_latency_yb_master_MasterService_GetLoadBalancerState",
    "handler_latency_yb_master_MasterService_GetLoadMoveCompletion",
    "handler_latency_yb_master_MasterService_GetMasterClusterConfig",
    "handler_latency_yb_master_MasterService_GetMasterRegistration",
    "handler_latency_yb_master_MasterService_GetNamespaceInfo",
    "handler_latency_yb_master_MasterService_GetPermissions",
    "handler_latency_yb_master_MasterService_GetTableLocations",
    "handler_latency_yb_master_MasterService_GetTableSchema",
    "handler_latency_yb_master_MasterService_GetTabletLocations",
    "handler_latency_yb_master_MasterService_GetUDType",
    "handler_latency_yb_master_MasterService_GetUniveerserReplication",
    "handler_latency_yb_master_MasterService_GetUniverseKeyRegistration",
    "handler_latency_yb_master_MasterService_GetYsqlCatalogConfig",
    "handler_latency_yb_master_MasterService_GrantRevokePermission",
    "handler_latency_yb_master_MasterService_GrantRevokeRole",
    "handler_latency_yb_master_MasterService_HasUniverseKeyInMemory",
    "handler_latency_yb_master_MasterService_IsAlterTableDone",
    "handler_latency_yb_master_MasterService_IsCreateNamespaceDone",
    "handler_latency_yb_master_MasterService_IsCreateTableDone",
    "handler_latency_yb_master_MasterService_IsDeleteNamespaceDone",
    "handler_latency_yb_master_MasterService_IsDeleteTableDone",
    "handler_latency_yb_master_MasterService_IsEncryptionEnabled",
    "handler_latency_yb_master_MasterService_IsFlushTablesDone",
    "handler_latency_yb_master_MasterService_IsInitDbDone",
    "handler_latency_yb_master_MasterService_IsLoadBalanced",
    "handler_latency_yb_master_MasterService_IsLoadBalancerIdle",
    "handler_latency_yb_master_MasterService_IsMasterLeaderServiceReady",
    "handler_latency_yb_master_MasterService_IsSetupUniverseReplicationDone",
    "handler_latency_yb_master_MasterService_IsTruncateTableDone",
    "handler_latency_yb_master_MasterService_LaunchBackfillIndexForTable",
    "handler_latency_yb_master_MasterService_ListCDCStreams",
    "handler_latency_yb_master_MasterService_ListLiveTabletServers",
    "handler_latency_yb_master_MasterService_ListMasterRaftPeers",
    "handler_latency_yb_master_MasterService_ListMasters",
    "handler_latency_yb_master_MasterService_ListNamespaces",
    "handler_latency_yb_master_MasterService_ListTablegroups",
    "handler_latency_yb_master_MasterService_ListTables",
    "handler_latency_yb_master_MasterService_ListTabletServers",
    "handler_latency_yb_master_MasterService_ListUDType",
    "handler_latency_yb_master_MasterService_RedisConfigGet",
    "handler_latency_yb_master_MasterService_RedisConfigSet",
    "handler_latency_yb_master_MasterService_RemoveMasterUpdate",
    "handler_latency_yb_master_MasterService_ReservePgsqlOids",
    "handler_latency_yb_master_MasterService_SetPreferredZones",
    "handler_latency_yb_master_MasterService_SetUniverseReplicationEnabled",
    "handler_latency_yb_master_MasterService_SetupUniverseReplication",
    "handler_latency_yb_master_MasterService_SplitTablet",
    "handler_latency_yb_master_MasterService_TSHeartbeat",
    "handler_latency_yb_master_MasterService_TruncateTable",
    "handler_latency_yb_master_MasterService_UpdateCDCStream",
    "handler_latency_yb_server_GenericService_FlushCoverage",
    "handler_latency_yb_server_GenericService_GetAutoFlagsConfigVersion",
    "handler_latency_yb_server_GenericService_GetFlag",
    "handler_latency_yb_server_GenericService_GetStatus",
    "handler_latency_yb_server_GenericService_Ping",
    "handler_latency_yb_server_GenericService_RefreshFlags",
    "handler_latency_yb_server_GenericService_ReloadCertificates",
    "handler_latency_yb_server_GenericService_ServerClock",
    "handler_latency_yb_server_GenericService_SetFlag",
    "handler_latency_yb_tserver_PgClientService_AlterDatabase",
    "handler_latency_yb_tserver_PgClientService_AlterTable",
    "handler_latency_yb_tserver_PgClientService_BackfillIndex",
    "handler_latency_yb_tserver_PgClientService_CheckIfPitrActive",
    "handler_latency_yb_tserver_PgClientService_CreateDatabase",
    "handler_latency_yb_tserver_PgClientService_CreateSequencesDataTable",
    "handler_latency_yb_tserver_PgClientService_CreateTable",
    "handler_latency_yb_tserver_PgClientService_CreateTablegroup",
    "handler_latency_yb_tserver_PgClientService_DeleteDBSequences",
    "handler_latency_yb_tserver_PgClientService_DeleteSequenceTuple",
    "handler_latency_yb_tserver_PgClientService_DropDatabase",
    "handler_latency_yb_tserver_PgClientService_DropTable",
    "handler_latency_yb_tserver_PgClientService_DropTablegroup",
    "handler_latency_yb_tserver_PgClientService_FinishTransaction",
    "handler_latency_yb_tserver_PgClientService_GetCatalogMasterVersion",
    "handler_latency_yb_tserver_PgClientService_GetDatabaseInfo",
    "handler_latency_yb_tserver_PgClientService_GetTableDiskSize",
    "handler_latency_yb_tserver_PgClientService_GetTserverCatalogVersionInfo",
    "handler_latency_yb_tserver_PgClientService_Heartbeat",
    "handler_latency_yb_tserver_PgClientService_InsertSequenceTuple",
    "handler_latency_yb_tserver_PgClientService_IsInitDbDone",
    "handler_latency_yb_tserver_PgClientService_ListLiveTabletServers",
    "handler_latency_yb_tserver_PgClientService_OpenTable",
    "handler_latency_yb_tserver_PgClientService_Perform",
    "handler_latency_yb_tserver_PgClientService_ReadSequenceTuple",
    "handler_latency_yb_tserver_PgClientService_ReserveOids",
    "handler_latency_yb_tserver_PgClientService_RollbackToSubTransaction",
    "handler_latency_yb_tserver_PgClientService_SetActiveSubTransaction",
    "handler_latency_yb_tserver_PgClientService_TabletServerCount",
    "handler_latency_yb_tserver_PgClientService_TruncateTable",
    "handler_latency_yb_tserver_PgClientService_UpdateSequenceTuple",
    "handler_latency_yb_tserver_PgClientService_ValidatePlacement",
    "handler_latency_yb_tserver_RemoteBootstrapService_BeginRemoteBootstrapSession",
    "handler_latency_yb_tserver_RemoteBootstrapService_ChangePeerRole",
    "handler_latency_yb_tserver_RemoteBootstrapService_CheckRemoteBootstrapSessionActive",
    "handler_latency_yb_tserver_RemoteBootstrapService_CheckSessionActive",
    "handler_latency_yb_tserver_RemoteBootstrapService_EndRemoteBootstrapSession",
    "handler_latency_yb_tserver_RemoteBootstrapService_FetchData",
    "handler_latency_yb_tserver_RemoteBootstrapService_KeepLogAnchorAlive",
    "handler_latency_yb_tserver_RemoteBootstrapService_RegisterLogAnchor",
    "handler_latency_yb_tserver_RemoteBootstrapService_RemoveRemoteBootstrapSession",
    "handler_latency_yb_tserver_RemoteBootstrapService_RemoveSession",
    "handler_latency_yb_tserver_RemoteBootstrapService_UnregisterLogAnchor",
    "handler_latency_yb_tserver_RemoteBootstrapService_UpdateLogAnchor",
    "handler_latency_yb_tserver_TabletServerAdminService_AddTableToTablet",
    "handler_latency_yb_tserver_TabletServerAdminService_AlterSchema",
    "handler_latency_yb_tserver_TabletServerAdminService_BackfillDone",
    "handler_latency_yb_tserver_TabletServerAdminService_BackfillIndex",
    "handler_latency_yb_tserver_TabletServerAdminService_CopartitionTable",
    "handler_latency_yb_tserver_TabletServerAdminService_CountIntents",
    "handler_latency_yb_tserver_TabletServerAdminService_CreateTablet",
    "handler_latency_yb_tserver_TabletServerAdminService_DeleteTablet",
    "handler_latency_yb_tserver_TabletServerAdminService_FlushTablets",
    "handler_latency_yb_tserver_TabletServerAdminService_GetSafeTime",
    "handler_latency_yb_tserver_TabletServerAdminService_GetTransactionStatusAtParticipant",
    "handler_latency_yb_tserver_TabletServerAdminService_PrepareDeleteTransactionTablet",
    "handler_latency_yb_tserver_TabletServerAdminService_RemoveTableFromTablet",
    "handler_latency_yb_tserver_TabletServerAdminService_SplitTablet",
    "handler_latency_yb_tserver_TabletServerAdminService_TabletSnapshotOp",
    "handler_latency_yb_tserver_TabletServerAdminService_TestRetry",
    "handler_latency_yb_tserver_TabletServerAdminService_UpdateTransaction",
    "handler_latency_yb_tserver_TabletServerAdminService_UpdateTransactionTablesVersion",
    "handler_latency_yb_tserver_TabletServerAdminService_UpgradeYsql",
    "handler_latency_yb_tserver_TabletServerBackupService_TabletSnapshotOp",
    "handler_latency_yb_tserver_TabletServerForwardService_Read",
    "handler_latency_yb_tserver_TabletServerForwardService_Write",
    "handler_latency_yb_tserver_TabletServerService_AbortTransaction",
    "handler_latency_yb_tserver_TabletServerService_Checksum",
    "handler_latency_yb_tserver_TabletServerService_GetLogLocation",
    "handler_latency_yb_tserver_TabletServerService_GetMasterAddresses",
    "handler_latency_yb_tserver_TabletServerService_GetSharedData",
    "handler_latency_yb_tserver_TabletServerService_GetSplitKey",
    "handler_latency_yb_tserver_TabletServerService_GetTabletStatus",
    "handler_latency_yb_tserver_TabletServerService_GetTransactionStatus",
    "handler_latency_yb_tserver_TabletServerService_GetTransactionStatusAtParticipant",
    "handler_latency_yb_tserver_TabletServerService_GetTserverCatalogVersionInfo",
    "handler_latency_yb_tserver_TabletServerService_ImportData",
    "handler_latency_yb_tserver_TabletServerService_IsTabletServerReady",
    "handler_latency_yb_tserver_TabletServerService_ListMasterServers",
    "handler_latency_yb_tserver_TabletServerService_ListTablets",
    "handler_latency_yb_tserver_TabletServerService_ListTabletsForTabletServer",
    "handler_latency_yb_tserver_TabletServerService_NoOp",
    "handler_latency_yb_tserver_TabletServerService_ProbeTransactionDeadlock",
    "handler_latency_yb_tserver_TabletServerService_Publish",
    "handler_latency_yb_tserver_TabletServerService_Read",
    "handler_latency_yb_tserver_TabletServerService_TakeTransaction",
    "handler_latency_yb_tserver_TabletServerService_Truncate",
    "handler_latency_yb_tserver_TabletServerService_UpdateTransaction",
    "handler_latency_yb_tserver_TabletServerService_UpdateTransactionStatusLocation",
    "handler_latency_yb_tserver_TabletServerService_UpdateTransactionWaitingForStatus",
    "handler_latency_yb_tserver_TabletServerService_VerifyTableRowRange",
    "handler_latency_yb_tserver_TabletServerService_Write",
    "log_append_latency",
    "log_gc_duration",
    "log_group_commit_latency",
    "log_reader_read_batch_latency",
    "log_roll_latency",
    "log_sync_latency",
    "op_apply_queue_time",
    "op_apply_run_time",
    "op_read_queue_run_time",
    "op_read_queue_time",
    "op_read_run_time",
    "post_split_trigger_compaction_pool_queue_time_us",
    "post_split_trigger_compaction_pool_run_time_us",
    "ql_read_latency",
    "ql_write_latency",
    "read_time_wait",
    "redis_read_latency",
    "rocksdb_compaction_times_micros",
    "rocksdb_db_get_micros",
    "rocksdb_db_multiget_micros",
    "rocksdb_db_seek_micros",
    "rocksdb_db_write_micros",
    "rocksdb_read_block_compaction_micros",
    "rocksdb_read_block_get_micros",
    "rocksdb_sst_read_micros",
    "rocksdb_wal_file_sync_micros",
    "rocksdb_write_raw_block_micros",
    "rpc_incoming_queue_time",
    "snapshot_read_inflight_wait_duration",
    "transaction_pool_cache",
    "ts_bootstrap_time",
    "wait_queue_resume_waiter_pool_queue_time_us",
    "wait_queue_resume_waiter_pool_run_time_us",
    "write_lock_latency",
    "write_op_duration_client_propagated_consistency",
    "ycql_queries_system_auth_resource_role_permission_index",
    "ycql_queries_system_auth_role_permissions",
    "ycql_queries_system_auth_roles",
    "ycql_queries_system_local",
    "ycql_queries_system_partitions",
    "ycql_queries_system_peers",
    "ycql_queries_system_schema_aggregates",
    "ycql_queries_system_schema_columns",
    "ycql_queries_system_schema_functions",
    "ycql_queries_system_schema_indexes",
    "ycql_queries_system_schema_keyspaces",
    "ycql_queries_system_schema_tables",
    "ycql_queries_system_schema_triggers",
    "ycql_queries_system_schema_types",
    "ycql_queries_system_schema_views",
    "ycql_queries_system_size_estimates",
)

_COUNTSUM_ROWS = [
    *((name, "microseconds", COUNTER) for name in _COUNTSUM_MICROSECONDS),
    ("deadlock_probe_latency", "milliseconds", COUNTER),
    ("deadlock_size", "transactions", COUNTER),
    ("handler_latency_yb_cqlserver_SQLProcessor_NumFlushesToExecute", "operations", COUNTER),
    ("handler_latency_yb_cqlserver_SQLProcessor_NumRetriesToExecute", "operations", COUNTER),
    ("handler_latency_yb_cqlserver_SQLProcessor_NumRoundsToAnalyze", "operations", COUNTER),
    ("handler_latency_yb_cqlserver_SQLProcessor_ResponseSize", "bytes", COUNTER),
    ("log_bytes_logged", "bytes", COUNTER),
    ("log_entry_batches_per_group", "requests", COUNTER),
    ("log_wal_size", "bytes", COUNTER),
    ("op_apply_queue_length", "tasks", COUNTER),
    ("op_read_queue_length", "tasks", COUNTER),
    ("rocksdb_bytes_per_multiget", "bytes", COUNTER),
    ("rocksdb_bytes_per_read", "bytes", COUNTER),
    ("rocksdb_bytes_per_write", "bytes", COUNTER),
    ("rocksdb_numfiles_in_singlecompaction", "files", COUNTER),
    ("ycql_queries_system_auth_resource_role_permissions_index", "?", COUNTER),
]



class ValueStatistics(StatisticsTable):
    """Known value statistics."""

    ROWS = _VALUE_ROWS


class CountSumStatistics(StatisticsTable):
    """Known count/sum statistics."""

    ROWS = _COUNTSUM_ROWS
