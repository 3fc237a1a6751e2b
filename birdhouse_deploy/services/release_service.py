# birdhouse_deploy/services/release_service.py
"""Release, delete and rollback orchestration"""

import logging
import posixpath
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..api.exceptions import DeployToolError, RollbackError
from ..constants import (
    BACKUP_SUFFIX,
    ErrorCode,
    Operation,
    REMOTE_HTACCESS_NAME,
    Target,
    UpdateMode,
)
from ..core import (
    ConfigStore,
    FilePreparer,
    ImageProcessor,
    ManifestBuilder,
    Minifier,
    PathResolver,
    PipelineLock,
    ScriptRunner,
    StatisticsLog,
    VersionWriter,
    build_upload_batch,
    remote_directories,
    resolve_version,
)
from ..models.config import AppConfig, PipelineConfig, SftpConfig
from ..models.result import OperationStatus, ReleaseResult, RunStatistics
from ..models.version import AppVersion
from ..storage import StorageBackend, StorageFactory
from ..utils.file_utils import clear_directory
from ..utils.formatting import format_duration
from .project_service import ProjectService

logger = logging.getLogger(__name__)

# (relative path, files done, files total)
ProgressCallback = Callable[[str, int, int], None]


@dataclass
class RunOptions:
    """What a pipeline run does, as selected on the command line"""

    operation: Operation = Operation.RELEASE
    target: Target = Target.NONE
    target_version: Optional[str] = None
    mode: UpdateMode = UpdateMode.REGULAR
    update_cache: bool = False
    minify: bool = False
    backup: bool = False
    skip_compressed: bool = False
    write_log: bool = True
    arguments: str = ""


@dataclass
class PipelineContext:
    """Configuration of one run, loaded once and passed to every stage"""

    path_resolver: PathResolver
    app_config: AppConfig
    pipeline: PipelineConfig
    sftp: Optional[SftpConfig] = None

    @classmethod
    def load(cls, path_resolver: PathResolver, target: Target = Target.NONE) -> 'PipelineContext':
        """Load and validate the configuration for ``target``

        Missing config files are created with default values.

        Raises:
            MissingConfigError: If required pipeline or SFTP keys are missing
            ConfigError: If the SFTP file is malformed
        """
        store = ConfigStore(path_resolver)
        app_config, pipeline = store.ensure_configs()
        store.validate_pipeline(pipeline)

        sftp = store.load_sftp_config(pipeline) if target.is_remote else None
        return cls(path_resolver=path_resolver, app_config=app_config, pipeline=pipeline, sftp=sftp)

    def application_path(self, target: Target) -> str:
        """Remote root of the deployment, ``/`` for local builds"""
        if target == Target.LOCAL:
            return "/"
        return "/" + self.pipeline.get_application_path(target).strip("/")

    def backup_path(self, target: Target) -> str:
        return self.application_path(target) + BACKUP_SUFFIX


class ReleaseService:
    """Runs the pipeline stages of a release, delete or rollback"""

    def __init__(self,
                 context: PipelineContext,
                 storage: Optional[StorageBackend] = None,
                 progress: Optional[ProgressCallback] = None):
        """
        Initialize release service

        Args:
            context: Loaded configuration of this run
            storage: Backend to use instead of the one derived from the target
            progress: Called after every uploaded file
        """
        self.context = context
        self.path_resolver = context.path_resolver
        self.pipeline = context.pipeline
        self._storage = storage
        self.progress = progress

    # Entry point

    async def run(self, options: RunOptions) -> ReleaseResult:
        """
        Execute the run described by ``options``

        Configuration, version, missing-file and minify errors propagate.
        Storage errors end in a FAILED result. Statistics are written for
        every targeted run unless disabled.
        Every run holds the project lock, including runs without a target
        that only rewrite the version files.

        Args:
            options: Run options

        Returns:
            Result of the run
        """
        result = ReleaseResult(operation=options.operation, target=options.target)

        if options.operation == Operation.RELEASE:
            current = AppVersion.parse(self.context.app_config.version)
            version = resolve_version(current, options.target_version, options.mode)
            result.version = str(version)
        else:
            if options.target == Target.NONE:
                raise ValueError(f"{options.operation.value} requires a target")
            version = None
            result.version = str(self.context.app_config.version)

        with PipelineLock(self.path_resolver.lock_file):
            if options.target == Target.NONE:
                await self._local_stages(options, version, result)
                result.complete(OperationStatus.SUCCESS)
                return result

            result.application_path = self.context.application_path(options.target)

            if options.operation == Operation.RELEASE:
                await self._release(options, version, result)
            elif options.operation == Operation.DELETE:
                await self._guarded(self._delete, options, result)
            elif options.operation == Operation.ROLLBACK:
                await self._guarded(self._rollback, options, result)

            if result.status == OperationStatus.IN_PROGRESS:
                result.complete(OperationStatus.SUCCESS)

            self.write_statistics(options, result)

        return result

    # Stages

    async def _local_stages(self, options: RunOptions, version: AppVersion,
                            result: ReleaseResult) -> None:
        """Version, manifest, cache list and minification"""
        self.context.app_config = VersionWriter(self.path_resolver).apply(
            self.context.app_config, version
        )

        builder = ManifestBuilder(self.path_resolver, self.pipeline)
        manifest = builder.build()
        entries = builder.cache_entries(manifest)
        if options.update_cache:
            builder.write_cache_file(entries)

        result.manifest = manifest
        result.cached_files = len(entries)
        result.cache_size = builder.compute_cache_size(entries)

        if options.minify:
            result.minify_report = Minifier(self.path_resolver).minify(manifest)

    async def _compress_images(self, options: RunOptions, result: ReleaseResult) -> None:
        if options.skip_compressed:
            logger.info("Skipping image compression")
            return
        if not self.pipeline.uncompressed_dir or not self.pipeline.compressed_dir:
            logger.info("Image directories not configured, skipping compression")
            return

        processor = ImageProcessor(self.path_resolver.project_root)
        result.image_report = await processor.compress_directory(
            self.path_resolver.resolve(self.pipeline.uncompressed_dir),
            self.path_resolver.resolve(self.pipeline.compressed_dir),
        )
        for failed in result.image_report.failed:
            result.add_warning(f"Image compression failed: {failed}")

    def _script_runner(self, options: RunOptions, version: AppVersion) -> ScriptRunner:
        return ScriptRunner(self.path_resolver.project_root, env={
            "BIRDHOUSE_VERSION": str(version),
            "BIRDHOUSE_TARGET": options.target.value,
        })

    async def _release(self, options: RunOptions, version: AppVersion,
                       result: ReleaseResult) -> None:
        """Targeted release: local stages, then upload"""
        ProjectService(self.path_resolver).copy_root_files()

        await self._compress_images(options, result)

        scripts = await self._script_runner(options, version).run_all(
            self.pipeline.pre_release_scripts
        )
        result.warnings.extend(e.message for e in scripts.errors)

        await self._local_stages(options, version, result)
        ManifestBuilder(self.path_resolver, self.pipeline).check_files_exist(result.manifest)

        await self._guarded(self._upload, options, result)

        if result.status == OperationStatus.IN_PROGRESS and options.target.is_remote:
            scripts = await self._script_runner(options, version).run_all(
                self.pipeline.post_release_scripts
            )
            result.warnings.extend(e.message for e in scripts.errors)

    def upload_batch(self, result: ReleaseResult, options: RunOptions) -> List[str]:
        """Files uploaded by a release"""
        builder = ManifestBuilder(self.path_resolver, self.pipeline)
        return build_upload_batch(
            result.manifest,
            extra_files=builder.collect_directory(self.pipeline.database_dir),
            skip_dir=self.pipeline.compressed_dir if options.skip_compressed else None,
        )

    # Storage operations

    def _create_storage(self, target: Target) -> StorageBackend:
        if self._storage is not None:
            return self._storage
        return StorageFactory.create_for_target(
            target,
            dist_dir=self.path_resolver.get_dist_dir(self.pipeline.dist_path),
            sftp_config=self.context.sftp,
        )

    async def _guarded(self, operation, options: RunOptions, result: ReleaseResult) -> None:
        """Run a storage operation with one connection, failing the result on errors"""
        start = time.monotonic()
        storage = self._create_storage(options.target)

        try:
            async with storage:
                await operation(storage, options, result)
        except DeployToolError as e:
            elapsed = format_duration(time.monotonic() - start)
            logger.error(f"{options.operation.value.capitalize()} failed after {elapsed}: {e}")
            result.files_uploaded = 0
            result.add_error(e.error_code or ErrorCode.REMOTE_OPERATION_FAILED, str(e))
            result.complete(OperationStatus.FAILED)

    async def _upload(self, storage: StorageBackend, options: RunOptions,
                      result: ReleaseResult) -> None:
        app_path = result.application_path
        batch = self.upload_batch(result, options)

        if options.target == Target.LOCAL:
            dist_dir = self.path_resolver.get_dist_dir(self.pipeline.dist_path)
            logger.info(f"Clearing {dist_dir}")
            clear_directory(dist_dir)
        elif options.backup:
            await self._backup(storage, options)

        await storage.make_dirs(app_path)
        for directory in remote_directories(batch, app_path):
            await storage.make_dirs(directory)

        await self._upload_htaccess(storage, app_path)

        preparer = FilePreparer(
            self.path_resolver,
            base_path=self.pipeline.base_path,
            use_minified=options.minify,
        )

        total = len(batch)
        logger.info(f"Uploading {total} files to {storage.display_name}{app_path}")
        for index, relative in enumerate(batch, start=1):
            with preparer.prepare(relative) as local_path:
                await storage.upload(local_path, posixpath.join(app_path, relative))
            result.files_uploaded += 1
            logger.debug(f"Uploaded {relative}")
            if self.progress:
                self.progress(relative, index, total)

    async def _upload_htaccess(self, storage: StorageBackend, app_path: str) -> None:
        if not self.pipeline.htaccess_file:
            return

        htaccess = self.path_resolver.resolve(self.pipeline.htaccess_file)
        if not htaccess.is_file():
            logger.warning(f"Header file not found, skipping: {self.pipeline.htaccess_file}")
            return

        await storage.upload(htaccess, posixpath.join(app_path, REMOTE_HTACCESS_NAME))
        logger.info(f"Uploaded {self.pipeline.htaccess_file} as {REMOTE_HTACCESS_NAME}")

    async def _backup(self, storage: StorageBackend, options: RunOptions) -> None:
        app_path = self.context.application_path(options.target)
        backup_path = self.context.backup_path(options.target)

        if not await storage.exists(app_path):
            logger.warning(f"No deployment at {app_path}, nothing to back up")
            return

        if await storage.exists(backup_path):
            logger.info(f"Removing previous backup {backup_path}")
            await storage.delete(backup_path)

        count = await storage.copy_tree(app_path, backup_path)
        logger.info(f"Backed up {count} files from {app_path} to {backup_path}")

    async def _delete(self, storage: StorageBackend, options: RunOptions,
                      result: ReleaseResult) -> None:
        if options.target == Target.LOCAL:
            dist_dir = self.path_resolver.get_dist_dir(self.pipeline.dist_path)
            clear_directory(dist_dir)
            logger.info(f"Cleared {dist_dir}")
            return

        app_path = result.application_path
        if not await storage.exists(app_path):
            logger.warning(f"Nothing to delete at {app_path}")
            result.add_warning(f"Nothing to delete at {app_path}")
            return

        await storage.delete(app_path)
        logger.info(f"Deleted {app_path}")

    async def _rollback(self, storage: StorageBackend, options: RunOptions,
                        result: ReleaseResult) -> None:
        app_path = result.application_path
        backup_path = self.context.backup_path(options.target)

        if not await storage.exists(backup_path):
            raise RollbackError(backup_path)

        await storage.make_dirs(app_path)
        result.files_uploaded = await storage.copy_tree(backup_path, app_path)
        logger.info(f"Rolled back {app_path} from {backup_path}")

    # Statistics

    def write_statistics(self, options: RunOptions, result: ReleaseResult) -> None:
        """Prepend the statistics block of ``result`` to the log file"""
        if not options.write_log or not self.pipeline.statistics_file:
            return

        stats = RunStatistics.from_result(result, options.arguments)
        StatisticsLog(self.path_resolver.resolve(self.pipeline.statistics_file)).prepend(stats)
