import logging
from typing import AsyncIterable

from dishka import Provider, provide, Scope, from_context
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from chatapp.config import Config, configure_logging
from chatapp.adapters.api.dao import CommonHTTPClient, CloudinaryHTTPDAO
from chatapp.adapters.database.dao import (
    AbstractUserDAO, UserDAO,
    AbstractMessageDAO, MessageDAO,
)
from chatapp.adapters.database.service import MessageService
from chatapp.adapters.database.structures import Base
from chatapp.adapters.validation import SaveMessageRequestValidator, SaveImageRequestValidator


class AppProvider(Provider):
    scope = Scope.APP

    config = from_context(provides=Config, scope=Scope.APP)

    @provide(scope=Scope.APP)
    async def logger(self, config: Config) -> logging.Logger:
        return configure_logging(config)

    @provide(scope=Scope.APP)
    async def api_client(self, config: Config, logger: logging.Logger) -> AsyncIterable[CommonHTTPClient]:
        client = CommonHTTPClient(
            base_url=config.cloudinary.base_url,
            timeout=config.http.timeout,
            max_retries=config.http.max_retries,
            retry_delay=config.http.retry_delay,
            logger=logger
        )
        await client.initialize()
        yield client
        await client.close()

    @provide(scope=Scope.APP)
    async def cloudinary_dao(
            self,
            http_client: CommonHTTPClient,
            config: Config,
            logger: logging.Logger
    ) -> CloudinaryHTTPDAO:
        return CloudinaryHTTPDAO(http_client=http_client, config=config.cloudinary, logger=logger)

    @provide(scope=Scope.APP)
    async def database(self, config: Config) -> AsyncIterable[async_sessionmaker]:
        engine_kwargs = {}
        if config.database.url.startswith("sqlite") and ":memory:" in config.database.url:
            engine_kwargs = {
                "connect_args": {"check_same_thread": False},
                "poolclass": StaticPool,
            }
        engine = create_async_engine(config.database.url, echo=config.database.echo, **engine_kwargs)

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        yield async_sessionmaker(engine, autoflush=False, expire_on_commit=False)
        await engine.dispose()

    @provide(scope=Scope.REQUEST)
    async def new_connection(self, sessionmaker: async_sessionmaker) -> AsyncIterable[AsyncSession]:
        async with sessionmaker() as session:
            yield session

    @provide(scope=Scope.REQUEST)
    async def user_dao(self, session: AsyncSession, logger: logging.Logger) -> UserDAO:
        return UserDAO(session=session, logger=logger)

    @provide(scope=Scope.REQUEST)
    async def abstract_user_dao(self, user_dao: UserDAO) -> AbstractUserDAO:
        return user_dao

    @provide(scope=Scope.REQUEST)
    async def message_dao(
            self,
            session: AsyncSession,
            image_storage: CloudinaryHTTPDAO,
            logger: logging.Logger
    ) -> AbstractMessageDAO:
        return MessageDAO(session=session, image_storage=image_storage, logger=logger)

    @provide(scope=Scope.APP)
    async def text_message_validator(self, config: Config, logger: logging.Logger) -> SaveMessageRequestValidator:
        return SaveMessageRequestValidator(max_text_length=config.message.max_text_length, logger=logger)

    @provide(scope=Scope.APP)
    async def image_message_validator(self, logger: logging.Logger) -> SaveImageRequestValidator:
        return SaveImageRequestValidator(logger=logger)

    @provide(scope=Scope.REQUEST)
    async def message_service(
            self,
            message_dao: AbstractMessageDAO,
            user_dao: AbstractUserDAO,
            text_message_validator: SaveMessageRequestValidator,
            image_message_validator: SaveImageRequestValidator,
            logger: logging.Logger
    ) -> MessageService:
        return MessageService(
            message_dao=message_dao,
            user_dao=user_dao,
            text_message_validator=text_message_validator,
            image_message_validator=image_message_validator,
            logger=logger
        )
