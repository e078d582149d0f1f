# mongo_converge/models/whitelists.py
# 허용 키 목록 (컬렉션 옵션 / 인덱스 옵션 / 서버 파라미터)
# 목록에 없는 키는 조용히 무시하지 않고 검증 단계에서 바로 실패시킨다.

from typing import List

# === 컬렉션 옵션 =============================================================

# collMod 로 바꿀 수 있는 옵션: 비교/동기화 대상
MODIFIABLE_COLLECTION_OPTIONS: List[str] = [
    "validator",
    "validationLevel",
    "validationAction",
    "viewOn",
    "pipeline",
    "storageEngine",
    "indexOptionDefaults",
]

# 생성 시에만 의미 있는 옵션 (capped/size 는 생성 후 불변)
CREATE_ONLY_COLLECTION_OPTIONS: List[str] = ["capped", "size", "max", "collation", "writeConcern"]

COLLECTION_OPTIONS: List[str] = CREATE_ONLY_COLLECTION_OPTIONS + MODIFIABLE_COLLECTION_OPTIONS

# validator 가 있으면 서버가 채워 넣는 기본값
VALIDATION_DEFAULTS = {
    "validationLevel": "strict",
    "validationAction": "error",
}

# === 인덱스 옵션 =============================================================

INDEX_OPTIONS: List[str] = [
    "background",
    "unique",
    "partialFilterExpression",
    "sparse",
    "expireAfterSeconds",
    "storageEngine",
    "weights",
    "default_language",
    "language_override",
    "textIndexVersion",
    "2dsphereIndexVersion",
    "bits",
    "min",
    "max",
    "bucketSize",
]

# 텍스트 인덱스 전용 옵션 + 서버가 붙이는 내부 키
TEXT_INDEX = "text"
TEXT_LANGUAGE_DEFAULTS = {
    "default_language": "english",
    "language_override": "language",
}
TEXT_ONLY_OPTIONS: List[str] = ["default_language", "language_override", "weights"]
TEXT_SYNTHETIC_KEYS: List[str] = ["_fts", "_ftsx"]

# 서버가 알아서 붙이는 버전 값 (선언 안 했으면 비교하지 않음)
SERVER_ASSIGNED_INDEX_OPTIONS: List[str] = ["textIndexVersion", "2dsphereIndexVersion"]

# === 서버 파라미터 ===========================================================
# 런타임 setParameter 로 바꿀 수 있는 것들만. (startup 전용은 제외)

SERVER_PARAMETERS: List[str] = [
    # 인증/보안
    "clusterAuthMode",
    "ldapUserCacheInvalidationInterval",
    "ldapTimeoutMS",
    "ldapQueryUser",
    "ldapQueryPassword",
    "ldapUseConnectionPool",
    "ldapConnectionPoolMaxConnsPerHost",
    "scramIterationCount",
    "scramSHA256IterationCount",
    "sslMode",
    "tlsMode",
    "auditAuthorizationSuccess",
    # 일반
    "allowDiskUseByDefault",
    "cursorTimeoutMillis",
    "failIndexKeyTooLong",
    "notablescan",
    "ttlMonitorEnabled",
    "tcpFastOpenQueueSize",
    "disableJavaScriptJIT",
    "maxIndexBuildMemoryUsageMegabytes",
    "maxNumActiveUserIndexBuilds",
    "indexBuildMinAvailableDiskSpaceMB",
    "watchdogPeriodSeconds",
    "tcmallocReleaseRate",
    "slowConnectionThresholdMillis",
    # 쿼리
    "internalQueryExecYieldIterations",
    "internalQueryExecYieldPeriodMS",
    "internalQueryPlanEvaluationWorks",
    # 로깅/진단
    "logLevel",
    "logComponentVerbosity",
    "maxLogSizeKB",
    "quiet",
    "redactClientLogData",
    "traceExceptions",
    "diagnosticDataCollectionEnabled",
    "diagnosticDataCollectionDirectoryPath",
    "diagnosticDataCollectionDirectorySizeMB",
    "diagnosticDataCollectionFileSizeMB",
    "diagnosticDataCollectionPeriodMillis",
    # 복제
    "enableFlowControl",
    "flowControlTargetLagSeconds",
    "flowControlWarnThresholdSeconds",
    "initialSyncTransientErrorRetryPeriodSeconds",
    "oplogInitialFindMaxSeconds",
    "rollbackTimeLimitSecs",
    "waitForSecondaryBeforeNoopWriteMS",
    "createRollbackDataFiles",
    "enableElectionHandoff",
    "replBatchLimitBytes",
    "maxAcceptableLogicalClockDriftSecs",
    # 샤딩
    "enableShardedIndexConsistencyCheck",
    "maxTimeMSForHedgedReads",
    "readHedgingMode",
    "replMonitorMaxFailedChecks",
    "timeOutMonitoringReplicaSets",
    "ShardingTaskExecutorPoolReplicaSetMatching",
    "migrateCloneInsertionBatchDelayMS",
    "orphanCleanupDelaySecs",
    "rangeDeleterBatchDelayMS",
    "rangeDeleterBatchSize",
    # 스토리지
    "journalCommitInterval",
    "syncdelay",
    "wiredTigerMaxCacheOverflowSizeGB",
    "wiredTigerConcurrentReadTransactions",
    "wiredTigerConcurrentWriteTransactions",
    "wiredTigerEngineRuntimeConfig",
    "wiredTigerFileHandleCloseIdleTime",
    # 트랜잭션
    "maxTransactionLockRequestTimeoutMillis",
    "transactionLifetimeLimitSeconds",
    "maxTargetSnapshotHistoryWindowInSeconds",
]
