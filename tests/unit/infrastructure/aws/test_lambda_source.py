import boto3
import pytest
from botocore.exceptions import ClientError
from botocore.stub import Stubber

from lambstock.domain.models.inventory import FunctionRecord
from lambstock.infrastructure.aws.lambda_source import LambdaFunctionSource, error_code

ARN = "arn:aws:lambda:us-east-1:123456789012:function:{}"


@pytest.fixture
def lambda_client():
    return boto3.client(
        "lambda",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def stubber(lambda_client):
    with Stubber(lambda_client) as stub:
        yield stub
        stub.assert_no_pending_responses()


def test_first_page_request_and_mapping(lambda_client, stubber):
    stubber.add_response(
        "list_functions",
        {
            "Functions": [
                {"FunctionName": "api", "FunctionArn": ARN.format("api"), "Runtime": "python3.12", "CodeSize": 2048},
                {"FunctionName": "worker", "FunctionArn": ARN.format("worker"), "Runtime": "nodejs20.x", "CodeSize": 10},
            ],
            "NextMarker": "marker-1",
        },
        {"MaxItems": 100},
    )

    result = LambdaFunctionSource(lambda_client).list_functions_page()

    assert result.items == (
        FunctionRecord(arn=ARN.format("api"), name="api", runtime="python3.12", code_size=2048),
        FunctionRecord(arn=ARN.format("worker"), name="worker", runtime="nodejs20.x", code_size=10),
    )
    assert result.next_token == "marker-1"
    assert not result.is_last


def test_marker_is_forwarded_and_missing_fields_tolerated(lambda_client, stubber):
    stubber.add_response(
        "list_functions",
        {"Functions": [{"FunctionName": "image", "FunctionArn": ARN.format("image")}]},
        {"MaxItems": 25, "Marker": "marker-1"},
    )

    result = LambdaFunctionSource(lambda_client, page_size=25).list_functions_page("marker-1")

    assert result.items == (FunctionRecord(arn=ARN.format("image"), name="image"),)
    assert result.is_last


def test_empty_response_is_terminal(lambda_client, stubber):
    stubber.add_response("list_functions", {}, {"MaxItems": 100})

    result = LambdaFunctionSource(lambda_client).list_functions_page()

    assert result.items == ()
    assert result.is_last


@pytest.mark.parametrize("code, retryable", [
    ("TooManyRequestsException", True),
    ("ServiceException", False),
    ("InvalidParameterValueException", False),
])
def test_only_throttling_is_retryable(lambda_client, stubber, code, retryable):
    stubber.add_client_error("list_functions", service_error_code=code, service_message="boom", http_status_code=429)
    source = LambdaFunctionSource(lambda_client)

    with pytest.raises(ClientError) as excinfo:
        source.list_functions_page()

    assert error_code(excinfo.value) == code
    assert source.is_retryable(excinfo.value) is retryable


def test_non_client_errors_are_not_retryable(lambda_client):
    assert LambdaFunctionSource(lambda_client).is_retryable(TimeoutError("read timeout")) is False
