"""
Deployment Related Views
---------------------------

Handles moving vehicles between locations.
"""
from http import HTTPStatus

from aiohttp_apispec import docs
from marshmallow.fields import String

from uvr.models import Deployment
from uvr.serializer import JSendSchema, JSendStatus, Many
from uvr.serializer.decorators import returns, expects
from uvr.serializer.misc import DeploymentCreateSchema
from uvr.serializer.models import DeploymentSchema
from uvr.service import ServiceError
from uvr.service.access.deployments import get_deployment, get_deployments
from uvr.views.base import BaseView
from uvr.views.decorators import match_getter
from uvr.views.utils import FAILURES, service_failure, query_flag


class DeploymentsView(BaseView):
    """
    Gets the deployments, or deploys a vehicle to a location.
    """
    url = "/deployments"
    name = "deployments"

    @docs(summary="Get All Deployments")
    @returns(JSendSchema.of(deployments=Many(DeploymentSchema())))
    async def get(self):
        """Gets every deployment, or only the current ones with ``?current=true``."""
        if query_flag(self.request, "current"):
            deployments = await self.deployment_manager.active_deployments()
        else:
            deployments = await get_deployments()

        return {
            "status": JSendStatus.SUCCESS,
            "data": {"deployments": deployments}
        }

    @docs(summary="Deploy A Vehicle")
    @expects(DeploymentCreateSchema())
    @returns(deployed=(JSendSchema.of(deployment=DeploymentSchema()), HTTPStatus.CREATED), **FAILURES)
    async def post(self):
        """Deploys a vehicle, closing its deployment at any other location."""
        data = self.request["data"]
        try:
            deployment = await self.deployment_manager.deploy_vehicle(data["plate_id"], data["location_id"])
        except ServiceError as error:
            return service_failure(error)

        return "deployed", {
            "status": JSendStatus.SUCCESS,
            "data": {"deployment": deployment}
        }


class DeploymentView(BaseView):
    url = "/deployments/{deployment_id}"
    name = "deployment"
    with_deployment = match_getter(get_deployment, "deployment", deployment_id="deployment_id")

    @with_deployment
    @docs(summary="Get A Deployment")
    @returns(JSendSchema.of(deployment=DeploymentSchema()))
    async def get(self, deployment: Deployment):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"deployment": deployment}
        }


class DeploymentActionView(BaseView):
    url = "/deployments/{deployment_id}/{action}"
    with_deployment = match_getter(get_deployment, "deployment", deployment_id="deployment_id")
    actions = ("complete", "cancel")

    @with_deployment
    @docs(summary="Complete Or Cancel A Deployment")
    @returns(
        invalid_action=(JSendSchema(), HTTPStatus.NOT_FOUND),
        deployment_updated=JSendSchema.of(deployment=DeploymentSchema(), action=String()),
        **FAILURES
    )
    async def patch(self, deployment: Deployment):
        action = self.request.match_info["action"]
        if action not in self.actions:
            return "invalid_action", {
                "status": JSendStatus.FAIL,
                "data": {
                    "message": f"Invalid action. Pick between {', '.join(self.actions)}",
                    "actions": self.actions
                }
            }

        try:
            if action == "complete":
                deployment = await self.deployment_manager.complete_deployment(deployment)
            else:
                deployment = await self.deployment_manager.cancel_deployment(deployment)
        except ServiceError as error:
            return service_failure(error)

        return "deployment_updated", {
            "status": JSendStatus.SUCCESS,
            "data": {"deployment": deployment, "action": action}
        }
